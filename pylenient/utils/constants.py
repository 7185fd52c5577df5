APP_ORG = "QuickTools"
APP_NAME = "PyLenient"

# Grammar scopes that switch a document into the lenient dialect
LENIENT_JS_SCOPE = "source.js.lenient"
LENIENT_JSON_SCOPE = "source.json.lenient"

LANGUAGE_JS = "js"
LANGUAGE_JSON = "json"

# Notification categories
COULDNT_SAVE_LENIENT_FILE = "Couldn't save Lenient file"
COULDNT_CONVERT_TO_LENIENT = "Couldn't convert to Lenient"
COULDNT_CONVERT_FROM_LENIENT = "Couldn't convert from Lenient"

# Dismissed after every successful lenient save
STALE_ON_SAVE = (COULDNT_SAVE_LENIENT_FILE, COULDNT_CONVERT_TO_LENIENT)

DEFAULT_JSON_INDENT = 2
