# Archive layout
TARGET_ENTRY = "mission"           # Lua table at the archive root, no extension
MARKER = "requiredModules"

# Default substitution (asset pack rename)
DEFAULT_SEARCH = "Vietnam Assets Pack by EightBall & Tobi"
DEFAULT_REPLACE = "[VWV] Vietnam Assets Pack"

# Block delimiters
BRACE_OPEN = ord("{")
BRACE_CLOSE = ord("}")

# Zip extra field header ids
EXTRA_ZIP64 = 0x0001

TEXT_ENCODING = "utf-8"
