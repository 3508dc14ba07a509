from typing import Mapping
from urllib.parse import urlencode


def build_url(base_url: str, path: str, params: Mapping[str, str]) -> str:
    """Builds a link into the web app.

    >>> build_url("https://mycad.app/", "/verify-email", {"token": "T"})
    'https://mycad.app/verify-email?token=T'
    """
    url = f"{base_url.rstrip('/')}/{path.lstrip('/')}"
    if params:
        url = f"{url}?{urlencode(params)}"
    return url
