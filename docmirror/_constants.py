"""Common literal values used across docmirror.

The placeholder tokens form the contract between page templates and the
compiler; keep them in sync with ``templates/page.html`` and any custom
template a project ships.

Examples
--------
>>> from docmirror import _constants
>>> _constants.CONTENT
'{content}'
>>> _constants.HTML_EXTENSION
'html'
"""

CONTENT = "{content}"
NAVIGATION_ELEMENT = "{navigation-element}"
NAVIGATION_BASE = "{navigation-base}"
VERSION_SWITCHER_ELEMENT = "{version-switcher-element}"
VERSION_SWITCH_BASE = "{version-switch-base}"
VERSION_SWITCH_FILE = "{version-switch-file}"
RELATIVE_BASE_URL = "{relative-base-url}"
PROJECT_SITE = "{project-site}"

PLACEHOLDERS = (
    CONTENT,
    NAVIGATION_ELEMENT,
    NAVIGATION_BASE,
    VERSION_SWITCHER_ELEMENT,
    VERSION_SWITCH_BASE,
    VERSION_SWITCH_FILE,
    RELATIVE_BASE_URL,
    PROJECT_SITE,
)

HTML_EXTENSION = "html"
VENDOR_DIR = "vendor/"
VERSION_MARKER = "{version}"
PROJECT_MARKER = "{project}"
DEFAULT_NAVIGATION_BASE = f"/{PROJECT_MARKER}/{VERSION_MARKER}/"
