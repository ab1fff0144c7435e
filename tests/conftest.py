"""
Shared pytest fixtures for menukit tests.
"""

import pytest

from menukit import menu as menu_module


@pytest.fixture(autouse=True)
def clear_application_menu():
    """Leave no application menu or change handlers behind between tests."""
    yield
    menu_module._application_menu = None
    menu_module.application_menu_changed._items.clear()


@pytest.fixture
def edit_template():
    """A small Edit menu with a nested submenu and ordering hints."""
    return [
        {'title': 'Undo', 'id': 'undo'},
        {'title': 'Redo', 'id': 'redo'},
        {'type': 'separator'},
        {'title': 'Paste', 'id': 'paste', 'after': ['copy']},
        {'title': 'Cut', 'id': 'cut'},
        {'title': 'Copy', 'id': 'copy', 'after': ['cut']},
        {'type': 'separator'},
        {
            'title': 'Find',
            'id': 'find',
            'submenu': [
                {'title': 'Find Next', 'id': 'find_next'},
                {'title': 'Find...', 'id': 'find_dialog', 'before': ['find_next']},
            ],
        },
    ]

