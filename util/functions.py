# util/functions.py
def join_url(base_url: str, filename: str) -> str:
    """
    - Join `base_url` and `filename` with exactly one slash.
    - Trailing slashes on the base are dropped.
    """
    return f"{base_url.rstrip('/')}/{filename}"
