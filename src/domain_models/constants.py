# Rendering defaults
DEFAULT_HEADING_LEVEL = 6
DEFAULT_MAX_DEPTH = 128
MAX_DEPTH_LIMIT = 200
DEFAULT_MAX_FILE_SIZE_BYTES = 10 * 1024 * 1024
DEFAULT_SERVER_PORT = 5006

# Separators
WORD_SEPARATOR = " "
LABEL_SEPARATOR = ", "

# Block titles
WEB_CONTENT_LABEL = "web content"
LIST_LABEL = "list"
SEPARATOR_LABEL = "horizontal splitter"
BLOCK_CLOSING_PREFIX = "end of "

# Span labels
LINK_LABEL = "link"
IMAGE_LABEL = "image"

# State phrases, each carries its own trailing space
STATE_EXPANDED = "expanded "
STATE_COLLAPSED = "collapsed "
STATE_CHECKED = "checked "
STATE_UNCHECKED = "unchecked "
STATE_POPUP_TEMPLATE = "{value} pop-up "

# Error messages
ERROR_MISSING_NODE = "Cannot find node {node_id}"
ERROR_MISSING_ROLE = "Node {node_id} has no role"
ERROR_UNKNOWN_ROLE = "Unknown role {role}"
ERROR_CYCLE = "Cycle detected at node {node_id}"
ERROR_MAX_DEPTH = "Maximum depth exceeded at node {node_id}"

# Session storage key for the last loaded tree
SESSION_TREE_KEY = "accessibility_tree"
