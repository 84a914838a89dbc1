"""Machine-readable report formats.

Both formats share one structure:

    {
        "content_duplicates": [group, ...],
        "name_duplicates": [group, ...],
    }

where each group is

    {
        "group_id": <hex, 128-bit MurmurHash3 of the member paths>,
        "key": <fingerprint or normalized name>,
        "representative": <path>,
        "members": [{"path": <path>, "size": int, "mtime_ns": int, "mode": int}, ...],
    }

JSON stores paths as text and refuses paths that are not valid UTF-8. msgpack
stores paths as raw bytes, so every name survives, and can be read back with
from_msgpack().
"""

import json
import os
from enum import StrEnum
from typing import Any, Callable

import mmh3
import msgpack

from .collision import DuplicateGroup, DuplicateKind, DuplicateReport
from ..index.path import decode_path, decode_raw_path, encode_path
from ..tree.nodes import FileMetadata, RegularFile

FORMAT_VERSION = 1


class ReportFormat(StrEnum):
    TEXT = 'text'
    JSON = 'json'
    MSGPACK = 'msgpack'


def compute_group_id(group: DuplicateGroup) -> str:
    """Identify a group by its membership.

    The same files in the same order give the same identifier across runs, so
    reports of an unchanged tree can be compared by group_id.
    """
    raw = b'\0'.join(encode_path(member.path) for member in group.members)
    return mmh3.hash128(raw, signed=False).to_bytes(16, byteorder='big').hex()


def _group_to_dict(group: DuplicateGroup, convert_path: Callable[[Any], Any]) -> dict[str, Any]:
    return {
        'group_id': compute_group_id(group),
        # Normalized names come from paths and are encoded like them
        'key': convert_path(group.key) if group.kind == DuplicateKind.NAME else group.key,
        'representative': convert_path(group.representative.path),
        'members': [
            {
                'path': convert_path(member.path),
                'size': member.metadata.size,
                'mtime_ns': member.metadata.mtime_ns,
                'mode': member.metadata.mode,
            }
            for member in group.members
        ],
    }


def _report_to_dict(report: DuplicateReport, convert_path: Callable[[Any], Any]) -> dict[str, Any]:
    return {
        'version': FORMAT_VERSION,
        'content_duplicates': [_group_to_dict(g, convert_path) for g in report.content_groups],
        'name_duplicates': [_group_to_dict(g, convert_path) for g in report.name_groups],
    }


def to_json(report: DuplicateReport) -> str:
    """Serialize report as indented JSON.

    Raises:
        PathEncodingError: A member path is not valid UTF-8
    """
    return json.dumps(_report_to_dict(report, decode_path), indent=2)


def to_msgpack(report: DuplicateReport) -> bytes:
    """Serialize report with msgpack, paths as raw bytes."""
    result = msgpack.dumps(_report_to_dict(report, encode_path), use_bin_type=True)
    assert isinstance(result, bytes)
    return result


def from_msgpack(data: bytes) -> DuplicateReport:
    """Deserialize a report written by to_msgpack().

    Raises:
        ValueError: data is not a report in a supported format version
    """
    decoded = msgpack.loads(data, raw=False)
    if not isinstance(decoded, dict) or decoded.get('version') != FORMAT_VERSION:
        raise ValueError("not a treedup report or unsupported version")

    def load_key(kind: DuplicateKind, key: Any) -> str:
        return os.fsdecode(key) if kind == DuplicateKind.NAME else key

    def load_groups(kind: DuplicateKind, groups: list[dict[str, Any]]) -> list[DuplicateGroup]:
        return [
            DuplicateGroup(kind, load_key(kind, group['key']), [
                RegularFile(decode_raw_path(m['path']), FileMetadata(m['size'], m['mtime_ns'], m['mode']))
                for m in group['members']
            ])
            for group in groups
        ]

    return DuplicateReport(
        load_groups(DuplicateKind.CONTENT, decoded['content_duplicates']),
        load_groups(DuplicateKind.NAME, decoded['name_duplicates']),
    )
