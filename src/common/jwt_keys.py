# JWT signing material for a service config
import os

DEFAULT_KEY_PAIR = ("jwtRS256.key", "jwtRS256.key.pub")

# contents of the file at path, None when unset or missing
def _read_key(path):
    if not path or not os.path.exists(path):
        return None
    with open(path, "r") as f:
        return f.read()

# set RS256 keys on the config when a key pair is found (env paths first,
# then the default files in the working directory), an HS256 secret otherwise
def load_jwt_keys(config, *, private_key_env, public_key_env):
    candidates = (
        (os.getenv(private_key_env), os.getenv(public_key_env)),
        DEFAULT_KEY_PAIR,
    )
    for priv_path, pub_path in candidates:
        private_key, public_key = _read_key(priv_path), _read_key(pub_path)
        if private_key and public_key:
            config.JWT_PRIVATE_KEY = private_key
            config.JWT_PUBLIC_KEY = public_key
            config.JWT_ALGORITHM = "RS256"
            return config

    config.JWT_ALGORITHM = "HS256"
    config.JWT_SECRET_KEY = os.getenv("SECRET_KEY", "supersecretkey")
    return config
