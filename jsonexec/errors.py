class JsonExecError(Exception):
    pass


class InvalidPathError(JsonExecError):
    def __init__(self, path: str | None, message: str):
        super().__init__(f"{message} (path='{path}')")
        self.path = path
        self.message = message


class MalformedDocumentError(JsonExecError):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class PathNotFoundError(JsonExecError):
    def __init__(self, path: str, message: str = "No results for path"):
        super().__init__(f"{message} (path='{path}')")
        self.path = path
        self.message = message


class WriteTargetError(JsonExecError):
    def __init__(self, path: str, message: str):
        super().__init__(f"{message} (path='{path}')")
        self.path = path
        self.message = message


class AttributeNotFoundError(JsonExecError):
    def __init__(self, key: str):
        super().__init__(f"Attribute '{key}' not found.")
        self.key = key


class ConfigurationError(JsonExecError):
    pass


class ServiceError(JsonExecError):
    def __init__(self, message: str, *, index: int | None = None, path: str | None = None):
        details = []
        if index is not None:
            details.append(f"execution={index}")
        if path is not None:
            details.append(f"path='{path}'")
        suffix = f" ({', '.join(details)})" if details else ""
        super().__init__(f"{message}{suffix}")
        self.message = message
        self.index = index
        self.path = path
