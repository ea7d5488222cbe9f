"""
Coverage probe for loot_platform.storage.base.BaseStorage.

Goal:
    Execute the base-class abstract method bodies (which raise
    NotImplementedError) via super() calls in a concrete subclass,
    so those lines are credited by coverage.
"""

import pytest

from loot_platform.storage.base import BaseStorage


class _ProbeStorage(BaseStorage):
    """Concrete test subclass that forwards to BaseStorage via super()."""

    def create_user(self, username, password_hash):
        return super().create_user(username, password_hash)

    def find_user_by_username(self, username):
        return super().find_user_by_username(username)

    def list_items(self):
        return super().list_items()

    def create_item(self, name, quantity, price):
        return super().create_item(name, quantity, price)

    def update_item(self, item_id, name, quantity, price):
        return super().update_item(item_id, name, quantity, price)

    def delete_item(self, item_id):
        return super().delete_item(item_id)


@pytest.mark.parametrize(
    "call",
    [
        lambda s: s.create_user("u", "h"),
        lambda s: s.find_user_by_username("u"),
        lambda s: s.list_items(),
        lambda s: s.create_item("n", 1, 1.0),
        lambda s: s.update_item(1, "n", 1, 1.0),
        lambda s: s.delete_item(1),
    ],
)
def test_base_methods_raise_not_implemented(call):
    with pytest.raises(NotImplementedError):
        call(_ProbeStorage())


def test_base_cannot_be_instantiated():
    with pytest.raises(TypeError):
        BaseStorage()
