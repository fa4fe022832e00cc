#!/usr/bin/env python3
"""Storage access control quickstart.

Demonstrates the core workflow:

1. Create a StorageAccessControl with an in-memory event collaborator.
2. Allocate a custom access type.
3. Register an access tree with wildcards.
4. Access storages and use the returned accessors.
5. Release storages and directories.
6. Inspect a denial.

Run:
    python examples/quickstart.py
"""
from __future__ import annotations

import json
import logging

from storage_access import (
    StorageAccess,
    StorageAccessConfig,
    StorageAccessControl,
    StorageAccessError,
)
from storage_access.core.interfaces import InMemoryStorageEvents


def main() -> None:
    logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    # -- Step 1: Create the facade -------------------------------------------
    events = InMemoryStorageEvents()
    control = StorageAccessControl(events, StorageAccessConfig())
    print("[1] StorageAccessControl created")

    # -- Step 2: Allocate a custom access type -------------------------------
    image = control.add_access_type("IMAGE")
    print(f"[2] Allocated IMAGE as bit {image:#x}")

    # -- Step 3: Register the tree --------------------------------------------
    control.register(
        {
            "config": {
                "app": StorageAccess.JSON,
                "notes": StorageAccess.TEXT | StorageAccess.BINARY,
            },
            "users": {
                "*": {
                    "profile": StorageAccess.JSON,
                    "avatar": image | StorageAccess.BINARY,
                },
            },
            "cache": {"**/*": StorageAccess.ANY},
        }
    )
    print("[3] Access tree registered")

    # -- Step 4: Access storages ----------------------------------------------
    settings = control.access("config:app", StorageAccess.JSON)
    settings.set("theme", "dark")
    profile = control.access("users:alice:profile", StorageAccess.JSON)
    profile.write({"name": "Alice"})
    control.access("cache:thumbnails:2024:01", StorageAccess.BINARY).write(b"\x89PNG")
    print(f"[4] config:app -> {json.dumps(settings.read())}")
    print(f"    users:alice:profile -> {json.dumps(profile.read())}")

    # -- Step 5: Release -------------------------------------------------------
    control.release("config:app", StorageAccess.JSON)
    control.release_dir("users:alice")
    print("[5] Callbacks so far:")
    for call in events.calls:
        print(f"    {call}")

    # -- Step 6: Denial --------------------------------------------------------
    try:
        control.access("config:app", StorageAccess.TEXT)
    except StorageAccessError as exc:
        print(f"[6] Denied: {json.dumps(exc.to_dict(), indent=2)}")

    avatar = control.get_register_bit("users:bob:avatar")
    print(f"    users:bob:avatar registered as {control.access_type_name(avatar)}")


if __name__ == "__main__":
    main()
