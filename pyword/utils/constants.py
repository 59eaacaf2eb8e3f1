APP_ORG = "QuickTools"
APP_NAME = "PyWord Viewer"

SUPPORTED_EXTENSIONS = (".docx", ".doc")
PDF_EXTENSION = ".pdf"
FALLBACK_EXPORT_EXTENSION = ".docx"

UNTITLED_NAME = "Untitled.docx"
UNKNOWN_DOCUMENT = "Unknown document"
DEFAULT_PARAGRAPH_STYLE = "Normal"

# Temporary keys for unsaved documents; "://" never appears in a filesystem path.
TEMP_KEY_PREFIX = "untitled://"

OPEN_FILTER = "Word documents (*.docx *.doc);;All files (*)"
SAVE_FILTER = "Word document (*.docx)"
PDF_FILTER = "PDF (*.pdf)"

SETTINGS_GEOMETRY = "window/geometry"
SETTINGS_SPLITTER = "window/splitter"
SETTINGS_RECENTS = "file/recent"
MAX_RECENTS = 8
