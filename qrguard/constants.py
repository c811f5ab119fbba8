"""Shared constants for QRGuard.

All reference lists and numeric thresholds used by the scanner heuristics are
defined here. Other modules import from here.
"""

# ─── URL heuristics ───────────────────────────────────────────────────────────

# Hostname substring match: any hit yields a WARNING.
URL_SHORTENERS: tuple[str, ...] = (
    "bit.ly",
    "tinyurl.com",
    "goo.gl",
    "ow.ly",
    "short.link",
    "t.co",
)

# Hostname suffix match: any hit yields a WARNING.
SUSPICIOUS_TLDS: tuple[str, ...] = (
    ".tk",
    ".ml",
    ".ga",
    ".cf",
    ".gq",
    ".xyz",
    ".top",
    ".work",
)

# Typosquatting reference list. Order matters: the first domain within
# TYPOSQUAT_MAX_DISTANCE wins.
POPULAR_DOMAINS: tuple[str, ...] = (
    "google.com",
    "facebook.com",
    "instagram.com",
    "twitter.com",
    "youtube.com",
    "tokopedia.com",
    "shopee.co.id",
    "bukalapak.com",
    "lazada.co.id",
    "blibli.com",
)

# Edit distance d with 0 < d <= this value is flagged as typosquatting.
TYPOSQUAT_MAX_DISTANCE: int = 2

# Subdomain count (label count minus 2) above this value yields a WARNING.
MAX_SUBDOMAINS: int = 2

# ─── QRIS heuristics ──────────────────────────────────────────────────────────

# Lower-cased merchant names containing any of these yield a WARNING.
SUSPICIOUS_MERCHANT_KEYWORDS: tuple[str, ...] = (
    "official",
    "promo",
    "gratis",
    "bonus",
    "hadiah",
    "menang",
)

# Amounts strictly above this value (in IDR) yield a WARNING.
LARGE_AMOUNT_THRESHOLD: int = 1_000_000

# ISO 4217 numeric code for Indonesian Rupiah.
IDR_CURRENCY_CODE: str = "360"

# National Merchant ID shape: "ID" prefix, at least 15 characters.
NMID_PREFIX: str = "ID"
NMID_MIN_LENGTH: int = 15
