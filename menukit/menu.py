import logging
import threading
from collections.abc import Iterable, Mapping
from typing import Any, Callable, Optional, Union

from menukit import config
from menukit.errors import MenuError, TemplateError
from menukit.event import Event
from menukit.sorting import SEPARATOR, sort_menu_items

logger = logging.getLogger('menukit.menu')

ITEM_TYPES = {'normal', 'checkbox', SEPARATOR, 'submenu'}


class Menu:
    def __init__(self, title: str = '', items: Optional[list] = None, id: Optional[str] = None, **extra) -> None:
        """
        Args:
            title: the menu or submenu title
            items: the contents of the menu (can consist of Menu, MenuAction, or MenuSeparator instances)
            id: identifier used by get_menu_item_by_id and ordering constraints
            extra: arbitrary application fields, stored as attributes
        """
        self.title = title or ''
        self.items = []
        self.id = id
        self.type = 'submenu'
        for key, value in extra.items():
            setattr(self, key, value)

        for item in items or []:
            self.append(item)

    @classmethod
    def build_from_template(cls, template, title: str = '') -> 'Menu':
        """
        Build a menu from a list of mappings.

        Entries are ordered with sort_menu_items before any item is created,
        so ``before``, ``after``, ``before_group_containing`` and
        ``after_group_containing`` take effect here. The template itself is
        left untouched.

        Args:
            template: list of mappings, one per item
            title: title of the returned menu

        Raises:
            TemplateError: the template is not a list of mappings, an entry uses
                a field name the built item already has (such as ``items`` on
                a submenu), or an item type is unknown while strict templates
                are enabled
        """
        if isinstance(template, (str, bytes, Mapping)) or not isinstance(template, Iterable):
            raise TemplateError('Menu template must be a list of mappings', code='template')

        entries = list(template)
        for position, entry in enumerate(entries):
            if not isinstance(entry, Mapping):
                raise TemplateError(f'Menu template entry {position} is not a mapping', code='entry')
            if not all(isinstance(key, str) for key in entry):
                raise TemplateError(f'Menu template entry {position} has non-string keys', code='entry')

        menu = cls(title)
        for entry in sort_menu_items(entries):
            menu.append(_item_from_template(entry))

        logger.debug('Built menu %r with %d items', menu.title, len(menu.items))
        return menu

    def append(self, item: 'MenuItem') -> None:
        self.insert(len(self.items), item)

    def insert(self, index: int, item: 'MenuItem') -> None:
        if not isinstance(item, (Menu, MenuAction, MenuSeparator)):
            raise MenuError(f'Cannot add {item!r} to a menu', code='item')
        self.items.insert(index, item)

    def get_menu_item_by_id(self, id) -> Optional['MenuItem']:
        """Depth-first search through this menu and its submenus."""
        for item in self.items:
            if item.id is not None and item.id == id:
                return item
            if isinstance(item, Menu):
                found = item.get_menu_item_by_id(id)
                if found is not None:
                    return found
        return None

    def __repr__(self) -> str:
        return f'<Menu {self.title!r} ({len(self.items)} items)>'


class MenuAction:
    def __init__(self, title: str = '', function: Optional[Callable] = None, id: Optional[str] = None,
                 type: str = 'normal', checked: bool = False, enabled: bool = True, **extra) -> None:
        """
        Args:
            title: the item label
            function: called without arguments when the item is clicked
            id: identifier used by get_menu_item_by_id and ordering constraints
            type: 'normal' or 'checkbox'
            checked: initial state of a checkbox
            enabled: disabled items ignore clicks
            extra: arbitrary application fields, stored as attributes
        """
        self.title = title or ''
        self.function = function
        self.id = id
        self.type = type
        self.checked = bool(checked)
        self.enabled = enabled is not False
        for key, value in extra.items():
            setattr(self, key, value)

    def click(self) -> Any:
        if not self.enabled:
            return None
        if self.type == 'checkbox':
            self.checked = not self.checked
        if self.function is not None:
            return self.function()
        return None

    def __repr__(self) -> str:
        return f'<MenuAction {self.title!r}>'


class MenuSeparator:
    def __init__(self, id: Optional[str] = None, **extra) -> None:
        self.id = id
        self.type = SEPARATOR
        for key, value in extra.items():
            setattr(self, key, value)

    def __repr__(self) -> str:
        return '<MenuSeparator>'


MenuItem = Union[Menu, MenuAction, MenuSeparator]


def _item_type(entry: Mapping) -> str:
    item_type = entry.get('type')
    if item_type == SEPARATOR:
        return SEPARATOR
    if entry.get('submenu') is not None:
        return 'submenu'
    if item_type is None:
        return 'normal'
    if item_type not in ITEM_TYPES:
        if config.settings.STRICT_TEMPLATES:
            raise TemplateError(f'Unknown menu item type {item_type!r}', code='type')
        logger.warning("Unknown menu item type %r, treating it as 'normal'", item_type)
        return 'normal'
    return item_type


_ACTION_FIELDS = ('title', 'function', 'id', 'checked', 'enabled')


def _take(fields: dict, names) -> dict:
    return {name: fields.pop(name) for name in names if name in fields}


def _attach_fields(item: 'MenuItem', fields: dict) -> 'MenuItem':
    for key, value in fields.items():
        if hasattr(item, key):
            raise TemplateError(f'Menu template field {key!r} is reserved', code='entry')
        setattr(item, key, value)
    return item


def _item_from_template(entry: Mapping) -> 'MenuItem':
    item_type = _item_type(entry)
    fields = dict(entry)
    fields.pop('type', None)

    if item_type == SEPARATOR:
        item = MenuSeparator(**_take(fields, ('id',)))
    elif item_type == 'submenu':
        submenu = fields.pop('submenu', None)
        known = _take(fields, ('title', 'id'))
        if not isinstance(submenu, Menu):
            title = known.get('title') or ''
            submenu = Menu.build_from_template(submenu if submenu is not None else [], title)
        item = Menu(items=submenu.items, **known)
    else:
        item = MenuAction(type=item_type, **_take(fields, _ACTION_FIELDS))

    # everything else is an application field
    return _attach_fields(item, fields)


_application_menu: Optional[Menu] = None
_application_menu_lock = threading.Lock()

application_menu_changed = Event('application_menu_changed')


def set_application_menu(menu: Optional[Menu]) -> None:
    """
    Register the process-wide application menu.

    Args:
        menu: the new application menu, or None to clear it
    """
    global _application_menu

    if menu is not None and not isinstance(menu, Menu):
        raise MenuError('Application menu must be a Menu or None', code='application_menu')

    with _application_menu_lock:
        _application_menu = menu

    logger.debug('Application menu set to %r', menu)
    application_menu_changed.emit(menu)


def get_application_menu() -> Optional[Menu]:
    with _application_menu_lock:
        return _application_menu
