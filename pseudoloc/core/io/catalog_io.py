from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Literal

import yaml

from pseudoloc.core.errors import CatalogLoadError
from pseudoloc.core.model import Catalog


logger = logging.getLogger(__name__)

CatalogLayout = Literal["flat", "items"]

OUTPUT_NAME_PATTERN = "{locale}Pseudo.json"


def load_catalog(path: str | Path) -> Catalog:
    """Load a key -> string catalog from JSON or YAML.

    Two layouts are accepted:
      - flat: {"key": "value", ...}
      - items: {"items": [{"key": "...", "value": "..."}, ...]}, the
        envelope written by serializers that cannot emit top-level maps.

    Key order is preserved.
    """

    p = Path(path)
    if not p.exists():
        raise CatalogLoadError(
            code="E_FILE_NOT_FOUND",
            message="file does not exist",
            file=str(p),
        )

    suffix = p.suffix.lower()
    try:
        raw_text = p.read_text(encoding="utf-8")
    except Exception as e:  # pragma: no cover
        raise CatalogLoadError(code="E_FILE_READ", message=str(e), file=str(p)) from e

    try:
        if suffix in {".yaml", ".yml"}:
            data = yaml.safe_load(raw_text)
        elif suffix == ".json":
            data = json.loads(raw_text, object_pairs_hook=_reject_duplicate_keys)
        else:
            raise CatalogLoadError(
                code="E_UNSUPPORTED_FORMAT",
                message="supported formats are .json and .yaml/.yml",
                file=str(p),
            )
    except CatalogLoadError:
        raise
    except _DuplicateKey as e:
        raise CatalogLoadError(
            code="E_DUPLICATE_KEY",
            message=f"duplicate key: {e.key}",
            file=str(p),
            path=e.key,
        ) from e
    except Exception as e:
        code = "E_YAML_PARSE" if suffix in {".yaml", ".yml"} else "E_JSON_PARSE"
        raise CatalogLoadError(code=code, message=str(e), file=str(p)) from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise CatalogLoadError(
            code="E_INVALID_TOP_LEVEL",
            message="top-level document must be a mapping/object",
            file=str(p),
        )

    if _is_items_layout(data):
        catalog = _from_items(data["items"], str(p))
    else:
        catalog = _from_flat(data, str(p))

    logger.debug("loaded %d entries from %s", len(catalog), p)
    return catalog


def save_catalog(catalog: Catalog, path: str | Path, *, layout: CatalogLayout = "flat") -> Path:
    p = Path(path)
    if str(p.parent) not in (".", ""):
        p.parent.mkdir(parents=True, exist_ok=True)

    data: Any
    if layout == "items":
        data = {"items": [{"key": k, "value": v} for k, v in catalog.items()]}
    else:
        data = dict(catalog)

    with open(p, "w", encoding="utf-8") as f:
        if p.suffix.lower() in {".yaml", ".yml"}:
            yaml.safe_dump(data, f, sort_keys=False, default_flow_style=False, allow_unicode=True)
        else:
            json.dump(data, f, ensure_ascii=False, indent=2)
            f.write("\n")

    logger.debug("wrote %d entries to %s", len(catalog), p)
    return p


def output_path_for(source_path: str | Path, locale_id: str) -> Path:
    """Conventional output location: next to the source, named {Locale}Pseudo.json."""
    return Path(source_path).parent / OUTPUT_NAME_PATTERN.format(locale=locale_id)


class _DuplicateKey(ValueError):
    def __init__(self, key: str) -> None:
        super().__init__(key)
        self.key = key


def _reject_duplicate_keys(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for k, v in pairs:
        if k in out:
            raise _DuplicateKey(k)
        out[k] = v
    return out


def _is_items_layout(data: dict[str, Any]) -> bool:
    return list(data.keys()) == ["items"] and isinstance(data["items"], list)


def _from_flat(data: dict[Any, Any], file: str) -> Catalog:
    out: Catalog = {}
    for k, v in data.items():
        if not isinstance(k, str):
            raise CatalogLoadError(
                code="E_INVALID_ENTRY",
                message=f"keys must be strings, got {type(k).__name__}",
                file=file,
                path=str(k),
            )
        if not isinstance(v, str):
            raise CatalogLoadError(
                code="E_INVALID_ENTRY",
                message=f"value must be a string, got {type(v).__name__}",
                file=file,
                path=k,
            )
        out[k] = v
    return out


def _from_items(items: list[Any], file: str) -> Catalog:
    out: Catalog = {}
    for i, item in enumerate(items):
        item_path = f"items[{i}]"
        if not isinstance(item, dict):
            raise CatalogLoadError(
                code="E_INVALID_ENTRY",
                message="item must be an object with key and value",
                file=file,
                path=item_path,
            )
        k = item.get("key")
        v = item.get("value")
        if not isinstance(k, str) or not isinstance(v, str):
            raise CatalogLoadError(
                code="E_INVALID_ENTRY",
                message="item key and value must be strings",
                file=file,
                path=item_path,
            )
        if k in out:
            raise CatalogLoadError(
                code="E_DUPLICATE_KEY",
                message=f"duplicate key: {k}",
                file=file,
                path=f"{item_path}.key",
            )
        out[k] = v
    return out
