from menukit.errors import MenuError, TemplateError
from menukit.event import Event
from menukit.menu import (
    Menu,
    MenuAction,
    MenuSeparator,
    application_menu_changed,
    get_application_menu,
    set_application_menu,
)
from menukit.sorting import is_separator, sort_menu_items

__version__ = '0.1.0'

__all__ = [
    'Event',
    'Menu',
    'MenuAction',
    'MenuError',
    'MenuSeparator',
    'TemplateError',
    'application_menu_changed',
    'get_application_menu',
    'is_separator',
    'set_application_menu',
    'sort_menu_items',
]
