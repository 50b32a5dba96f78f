"""
Provisioning URLs for authenticator apps.

Only strings are produced here; nothing is fetched.  ``otpauth_uri`` is what
a QR code should contain, ``google_chart_url`` points at a rendered QR image.

Reference: https://github.com/google/google-authenticator/wiki/Key-Uri-Format
"""

import urllib.parse

from otpkit.core.hotp import Algorithm
from otpkit.core.utils import normalize_secret

GOOGLE_CHART_URL = "https://chart.googleapis.com/chart?chs={size}x{size}&chld=M|0&cht=qr&chl={data}"


def otpauth_uri(
    issuer: str,
    account: str,
    secret: str,
    period: int = 30,
    digits: int = 6,
    algorithm: Algorithm = Algorithm.SHA1,
) -> str:
    """
    Build an ``otpauth://totp/`` URI.

    Parameters left at Google Authenticator's defaults (SHA1, 6 digits, 30 s)
    are omitted, since some apps ignore or mishandle them.

    Raises:
        InvalidBase32CharacterError: If ``secret`` is not base32.
    """
    label = urllib.parse.quote(account, safe="@")
    query = [("secret", normalize_secret(secret))]
    if issuer:
        label = urllib.parse.quote(issuer, safe="") + ":" + label
        query.append(("issuer", issuer))
    algorithm = Algorithm(algorithm)
    if algorithm is not Algorithm.SHA1:
        query.append(("algorithm", algorithm.value))
    if digits != 6:
        query.append(("digits", str(digits)))
    if period != 30:
        query.append(("period", str(period)))
    return "otpauth://totp/{}?{}".format(label, urllib.parse.urlencode(query, quote_via=urllib.parse.quote))


def google_chart_url(company: str, holder: str, secret: str, size: int = 200) -> str:
    """
    Google Charts URL for a QR code provisioning ``secret`` for ``holder``.

    The embedded otpauth URI is kept literal and then URL-encoded as a whole,
    which is what Google Authenticator expects when scanning.
    """
    otpauth = f"otpauth://totp/{company}:{holder}?secret={secret}&issuer={company}"
    return GOOGLE_CHART_URL.format(size=size, data=urllib.parse.quote_plus(otpauth, safe=""))
