"""
requests authentication hook for the BSD Tools API.
"""

from requests.auth import AuthBase

from .constants import AUTH_TYPE
from .signer import RequestSigner


class BSDToolsAuth(AuthBase):
    """
    Signs each prepared request just before it is sent.

    requests calls the hook after the query string is fully encoded, so the
    MAC always covers exactly the parameters that go on the wire.
    """

    auth_type = AUTH_TYPE

    def __init__(self, signer: RequestSigner):
        self.signer = signer

    def __call__(self, r):
        r.url = self.signer.sign_url(r.url)
        return r

    def __repr__(self):
        return f"<BSDToolsAuth {self.auth_type} api_id={self.signer.credentials.api_id!r}>"
