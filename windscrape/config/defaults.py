"""Known Windguru page selectors.

Kept as ordered data so new provider quirks are additive: earlier entries
win, and running off the end of a list is never an error by itself.
"""

PROVIDER_DOMAIN = "windguru.cz"
PROVIDER_BASE_URL = "https://www.windguru.cz"

# Tried in order against the parsed document; first match wins.
TABLE_SELECTORS: list[str] = [
    "table.tabulka",
    'table[class*="forecast"]',
    ".forecast-table table",
    'table[id*="forecast"]',
    'table[class*="wind"]',
    "table.fcst_table",
    ".fcst_table_wrapper table",
]

# Waited on (any of them) in the browser before grabbing the markup.
TABLE_WAIT_SELECTORS: list[str] = [
    "table.tabulka",
    'table[class*="forecast"]',
    ".forecast-table",
    'table[id*="forecast"]',
    'table[class*="wind"]',
]

CONSENT_SELECTORS: list[str] = [
    'button[data-testid="uc-accept-all-button"]',
    ".fc-button.fc-cta-consent",
    "#didomi-notice-agree-button",
    ".cookie-consent-accept",
]

# Button captions matched case-insensitively after the CSS selectors.
CONSENT_BUTTON_LABELS: list[str] = [
    r"^\s*accept",
    r"^\s*i agree",
    r"^\s*agree",
]

SPOT_NAME_SELECTORS: list[str] = [
    "h1",
    ".spot-name",
    "title",
    ".location-name",
    "#spot-title",
]

# Page titles that belong to an overlay rather than the spot.
SPOT_NAME_BLOCKLIST: tuple[str, ...] = ("privacy", "cookie")
