from .scanner import Scanner
from .commands.scan import ScanResult
from .errors import (ScanError, SubtreeUnreadable, RootUnreadable, EntryUnreadable, DigestFailure,
                     PathEncodingError, ConfigError)
from .index.duplicate_index import DuplicateIndex, normalize_name
from .index.settings import ScanSettings
from .report.collision import DuplicateGroup, DuplicateKind, DuplicateReport, find_collisions
from .tree.filters import EntryFilter, HiddenEntryFilter, ExcludeFilter, IncludeFilter, AllOf
from .tree.nodes import Directory, RegularFile, Symlink, FileMetadata
from .tree.walker import walk_tree
from .utils.processor import Processor
