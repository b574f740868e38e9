"""Component declaration for the directory-backed blob substrate resource."""

from __future__ import annotations

from typing import TYPE_CHECKING

from packages.stowage_shared.config import StowageSettings

if TYPE_CHECKING:
    from resources.substrates.filesystem.filesystem_substrate import (
        LocalFilesystemBlobSubstrate,
    )

RESOURCE_COMPONENT_ID = "substrate_filesystem"


def build_component(*, settings: StowageSettings) -> "LocalFilesystemBlobSubstrate":
    """Build the concrete runtime instance for this resource component."""
    from resources.substrates.filesystem.config import (
        resolve_filesystem_substrate_settings,
    )
    from resources.substrates.filesystem.filesystem_substrate import (
        LocalFilesystemBlobSubstrate,
    )

    return LocalFilesystemBlobSubstrate(
        settings=resolve_filesystem_substrate_settings(settings),
    )
