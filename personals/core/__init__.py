"""Personal list - collected NPC records with paged descriptions."""

from .models import CommentLine, NpcRecord, PageSource, normalize_id
from .parser import parse_npc_blocks, extract_ids
from .registry import PersonalRegistry
from .paginator import DescriptionPager, MonospaceMeasurer, layout, wrap_text
from .persistence import SnapshotError, snapshot_registry, restore_registry
from .state import PersonalSession
from .commands import CommandError, dispatch, run_plugin_command
from .loader import MapEventSource, MapLoadError, load_map

__all__ = [
    'CommentLine', 'NpcRecord', 'PageSource', 'normalize_id',
    'parse_npc_blocks', 'extract_ids',
    'PersonalRegistry',
    'DescriptionPager', 'MonospaceMeasurer', 'layout', 'wrap_text',
    'SnapshotError', 'snapshot_registry', 'restore_registry',
    'PersonalSession',
    'CommandError', 'dispatch', 'run_plugin_command',
    'MapEventSource', 'MapLoadError', 'load_map',
]
