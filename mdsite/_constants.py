"""Common literal values used across mdsite.

These constants keep output filenames, layout placeholders, and date formats
centralized so builders, renderers, and tests import the same values without
drifting. Intended for internal use within the mdsite package.

Examples
--------
>>> from mdsite import _constants
>>> _constants.CSS_FILE_NAME
'app.css'
>>> _constants.PLACEHOLDER_BODY
'__BODY__'
"""

IMAGE_DIR = "images"
CSS_FILE_NAME = "app.css"
RSS_FILE_NAME = "rss.xml"
INDEX_FILE_NAME = "index.html"
DEFAULT_SUFFIX = ".md"

FEED_DATE_FORMAT = "%Y-%m-%d %H:%M"
FEED_RFC1123_FORMAT = "%a, %d %b %Y %H:%M:%S %Z"
MAX_FEED_ITEMS = 20
DESCRIPTION_LIMIT = 300

PLACEHOLDER_TITLE = "__TITLE__"
PLACEHOLDER_DESCRIPTION = "__DESCRIPTION__"
PLACEHOLDER_URL = "__URL__"
PLACEHOLDER_CSS = "__CSS__"
PLACEHOLDER_INDEX = "__INDEX__"
PLACEHOLDER_HEADER = "__HEADER__"
PLACEHOLDER_BODY = "__BODY__"
