"""
menukit.errors - exceptions raised by the menu model.

The ordering engine never raises; these cover malformed templates and
misuse of the menu API.
"""


class MenuError(Exception):
    """Base class for menukit errors.

    Args:
        message: error message
        code: optional short machine-readable code

    Example:
        >>> raise MenuError("Menu items must be menu objects", code="item")
    """

    def __init__(self, message: str, code: str = None) -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


class TemplateError(MenuError):
    """A menu template could not be turned into a menu.

    Example:
        >>> raise TemplateError("Menu template must be a list", code="template")
    """
