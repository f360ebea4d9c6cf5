"""Bloglist: a small blog sharing REST service and its command-line client."""
