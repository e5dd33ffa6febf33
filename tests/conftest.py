from __future__ import annotations

import pytest

from accessory.codegen.core.model import Import, Package, PointerType, Struct
from tests._fixtures.declarations import (
    BOOL,
    INT32,
    MUTEX,
    RWMUTEX,
    STRING,
    accessor,
    field,
    make_package,
)


@pytest.fixture
def tester_with_lock() -> Package:
    """Tester struct guarded by a sync.Mutex named lock."""
    return make_package(
        [
            Struct(
                "Tester",
                (
                    field("lock", MUTEX),
                    field("field1", STRING, accessor("getter:GetField1,setter")),
                    field("field2", INT32, accessor("getter:GetField2,setter")),
                    field("field3", PointerType(BOOL)),
                ),
            )
        ],
        imports=[Import("sync", "sync")],
    )


@pytest.fixture
def tester_with_rwmutex() -> Package:
    """Tester struct guarded by a sync.RWMutex named lock."""
    return make_package(
        [
            Struct(
                "Tester",
                (
                    field("lock", RWMUTEX),
                    field("field1", STRING, accessor("getter:GetField1,setter")),
                ),
            )
        ],
        imports=[Import("sync", "sync")],
    )
