"""
Settings — Default configuration values for the Voyager extractor.

The orchestrator uses DEFAULT_SETTINGS as fallback values when environment
variables are not set. The actual configuration is loaded from .env at
runtime.

Configuration precedence (highest to lowest):
  1. CLI flags (--debug, --no-save)
  2. Environment variables (from .env file)
  3. DEFAULT_SETTINGS (this file)

Settings reference:
  OUTPUT_DIR              Where to write extraction output (default: ./output)
  OUTPUT_RETENTION_DAYS   How many days to keep old output folders (0 = keep forever)
  SAVE_JSON               Whether to write resolved profiles to disk (default: True)
  DEBUG                   Whether to print verbose output (default: False)
  SEARCH_QUERY_ID         queryId of the people-search GraphQL endpoint
  PROFILE_QUERY_ID        queryId of the profile-by-identifier GraphQL endpoint
  USER_AGENT              User-Agent sent with every request
  SEARCH_COUNT            Page size used when the caller does not pass one

DEFAULT_HEADERS are sent on every request. They belong to the transport and
are handed to VoyagerClient explicitly; the client never reads this module
on its own.
"""

VOYAGER_GRAPHQL_URL = "https://www.linkedin.com/voyager/api/graphql"
PROFILE_URL_TEMPLATE = "https://www.linkedin.com/in/{}/"
SEARCH_REFERER_URL = "https://www.linkedin.com/search/results/people/"

DEFAULT_SEARCH_QUERY_ID = "voyagerSearchDashClusters.7cdf88d3366ad02cc5a3862fb9a24085"
DEFAULT_PROFILE_QUERY_ID = "voyagerIdentityDashProfiles.34ead06db82a2cc9a778fac97f69ad6a"

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/136.0.0.0 Safari/537.36"
)

DEFAULT_X_LI_TRACK = (
    '{"clientVersion":"1.13.35368","mpVersion":"1.13.35368","osName":"web",'
    '"timezoneOffset":-7,"timezone":"America/Los_Angeles","deviceFormFactor":"DESKTOP",'
    '"mpName":"voyager-web","displayDensity":2,"displayWidth":1920,"displayHeight":1080}'
)

DEFAULT_HEADERS = {
    "Accept": "application/vnd.linkedin.normalized+json+2.1",
    "Accept-Language": "en-GB,en-US;q=0.9,en;q=0.8",
    # requests decodes gzip/deflate itself; br and zstd need extra packages
    "Accept-Encoding": "gzip, deflate",
    "User-Agent": DEFAULT_USER_AGENT,
    "X-Li-Lang": "en_US",
    "X-Li-Track": DEFAULT_X_LI_TRACK,
    "X-Restli-Protocol-Version": "2.0.0",
}

REQUEST_TIMEOUT_SECONDS = 30

DEFAULT_SETTINGS = {
    "OUTPUT_DIR": "./output",
    "OUTPUT_RETENTION_DAYS": 30,
    "SAVE_JSON": True,
    "DEBUG": False,
    "SEARCH_QUERY_ID": DEFAULT_SEARCH_QUERY_ID,
    "PROFILE_QUERY_ID": DEFAULT_PROFILE_QUERY_ID,
    "USER_AGENT": DEFAULT_USER_AGENT,
    "SEARCH_COUNT": 10,
}
