"""
Persist window display settings in the per-user Windows registry.
"""

from .descriptors import (  # noqa: F401
    DescriptorTable,
    FrameParameter,
    GlobalVariable,
    Producer,
    SettingDescriptor,
    default_table,
)
from .encoders import EncodingKind  # noqa: F401
from .host import MappingHost  # noqa: F401
from .persistence import SettingsPersister, StoreReport  # noqa: F401
from .registry_store import RegistryStore  # noqa: F401
