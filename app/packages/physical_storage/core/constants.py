"""常量定义：集中维护状态码与对外展示的提示文案。"""

HTTP_STATUS_OK = 200
HTTP_STATUS_NOT_FOUND = 404

PATH_DELIMITER = "/"
LOCATION_PATH_SEPARATOR = " → "

MSG_INVALID_INPUT = "All required fields must be filled correctly."
MSG_INVALID_CAPACITY = "Folder capacity must be greater than 0."
MSG_INVALID_CAPACITY_UPDATE = "Invalid location or capacity."
MSG_INVALID_LOCATION_ID = "Invalid location ID."
MSG_INVALID_FILE_ID = "Invalid file ID."
MSG_DEPARTMENT_NOT_FOUND = "Department not found."
MSG_PARENT_NOT_FOUND = "Parent storage location not found."
MSG_LOCATION_NOT_FOUND = "Storage location not found."
MSG_FILE_NOT_FOUND = "File not found."
MSG_CAPACITY_FOLDER_ONLY = "Only folder units have a capacity."
MSG_HAS_CHILDREN = "Cannot delete unit with child locations."
MSG_HAS_FILES = "Cannot delete unit with associated files."
MSG_FOLDER_CREATE_FAILED = "Failed to create folder structure."
MSG_DATABASE_ERROR = "A database error occurred. Please try again."
MSG_NO_UNIT_NAMES = "At least one unit name must be provided."
MSG_UNEXPECTED_ERROR = "Internal server error."

MSG_UNIT_ADDED = "Storage unit added successfully."
MSG_UNIT_UPDATED = "Storage unit updated successfully."
MSG_UNIT_DELETED = "Storage unit deleted successfully."
MSG_FILE_DETACHED = "File removed from storage successfully."
MSG_HIERARCHY_ADDED = "Storage hierarchy added successfully."
