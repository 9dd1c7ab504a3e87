"""Headers that take part in request fingerprinting.

Only membership matters; ordering of the fingerprint is decided by the engine.
"""

from collections.abc import Mapping

FINGERPRINT_HEADERS: frozenset[str] = frozenset(
    {
        "User-Agent",
        "Accept",
        "Accept-Language",
        "Accept-Encoding",
        "Accept-Charset",
        "Connection",
        "Upgrade-Insecure-Requests",
        "Sec-Fetch-Site",
        "Sec-Fetch-Mode",
        "Sec-Fetch-User",
        "Sec-Fetch-Dest",
        "Sec-Ch-Ua",
        "Sec-Ch-Ua-Mobile",
        "Sec-Ch-Ua-Platform",
        "Sec-Ch-Ua-Platform-Version",
        "Sec-Ch-Ua-Arch",
        "Sec-Ch-Ua-Model",
        "Sec-Ch-Ua-Bitness",
        "Sec-Ch-Ua-Full-Version",
        "Sec-Ch-Ua-Full-Version-List",
        "Sec-Ch-Ua-Wow64",
        "Sec-Ch-Viewport-Width",
        "Sec-Ch-Viewport-Height",
        "Sec-Ch-Dpr",
        "Sec-Ch-Device-Memory",
        "Sec-Ch-Prefers-Color-Scheme",
        "Sec-Ch-Prefers-Reduced-Motion",
        "Cache-Control",
        "Pragma",
        "DNT",
        "Referer",
        "Origin",
        "Host",
        "Authorization",
        "X-Requested-With",
        "Content-Type",
        "If-None-Match",
        "If-Modified-Since",
        "X-Forwarded-Proto",
        "X-Forwarded-Port",
        "CF-Ray",
        "CF-IPCountry",
        "CF-Connecting-IP",
        "True-Client-IP",
        "X-Client-IP",
        "X-Cluster-Client-IP",
        "Forwarded",
        "Via",
        "X-Original-Forwarded-For",
        "CloudFront-Viewer-Country",
        "X-Amzn-Trace-Id",
        "Accept-Datetime",
        "TE",
        "Expect",
        "Max-Forwards",
        "Range",
        "Warning",
        "Date",
        "From",
        "Save-Data",
        "Viewport-Width",
        "Width",
        "DPR",
        "Device-Memory",
        "ECT",
        "RTT",
        "Downlink",
    }
)

FINGERPRINT_HEADER_KEYS: frozenset[str] = frozenset(name.lower() for name in FINGERPRINT_HEADERS)

# Carried as dedicated fields of PrimaryHeaders rather than in the sorted tail.
PRIMARY_HEADER_KEYS: frozenset[str] = frozenset(
    {"user-agent", "accept", "accept-language", "accept-encoding"}
)


def select_fingerprint_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Pick the allow-listed, non-empty headers out of a header mapping.

    ``headers`` is looked up by canonical name, so it should be
    case-insensitive (Starlette ``Headers`` is). Plain dicts are accepted as
    well; their keys are matched case-insensitively here.

    Returns:
        Mapping of lowercase header name to value. Absent or empty headers
        have no entry.
    """
    lowered = {name.lower(): value for name, value in headers.items()}
    selected: dict[str, str] = {}
    for key in FINGERPRINT_HEADER_KEYS:
        value = lowered.get(key)
        if value:
            selected[key] = value
    return selected
