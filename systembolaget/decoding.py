"""XML decoding for the catalog documents."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Type, TypeVar
from xml.parsers.expat import ExpatError

import xmltodict

from .errors import DecodeError
from .models import ARTICLE_TAGS, STORE_TAGS, Article, ArticleCatalog, Store, StoreDirectory

logger = logging.getLogger(__name__)

ARTICLE_ELEMENT = "artikel"
STORE_ELEMENT = "ButikOmbud"

RecordT = TypeVar("RecordT", Article, Store)


def _parse_document(source: Any) -> Any:
    try:
        parsed = xmltodict.parse(
            source,
            strip_whitespace=False,
            force_list=(ARTICLE_ELEMENT, STORE_ELEMENT),
        )
    except ExpatError as exc:
        raise DecodeError(f"invalid XML document: {exc}") from exc
    if not parsed:
        raise DecodeError("XML document has no root element")
    # The root element name is not checked.
    return next(iter(parsed.values()))


def _child(node: Any, name: str) -> Any:
    if not isinstance(node, dict):
        return None
    value = node.get(name)
    if isinstance(value, list):
        return value[-1] if value else None
    return value


def _extract_text(value: Any) -> str:
    if isinstance(value, dict):
        return str(value.get("#text", ""))
    if value is None:
        return ""
    return str(value)


def _iter_items(root: Any, name: str) -> List[Any]:
    if not isinstance(root, dict):
        return []
    items = root.get(name) or []
    if not isinstance(items, list):
        return [items]
    return items


def _build_record(record_type: Type[RecordT], item: Any, tags: Mapping[str, str]) -> RecordT:
    values: Dict[str, str] = {attr: _extract_text(_child(item, tag)) for attr, tag in tags.items()}
    return record_type(**values)


def decode_articles(source: Any) -> ArticleCatalog:
    """Decode an article catalog document.

    ``source`` may be bytes, text, a file-like object or a generator of byte
    chunks. Field values are kept exactly as they appear in the document.
    """
    root = _parse_document(source)

    created_at = _extract_text(_child(root, "skapad-tid"))
    if not created_at and isinstance(root, dict):
        created_at = str(root.get("@skapad-tid") or "")

    articles = tuple(_build_record(Article, item, ARTICLE_TAGS) for item in _iter_items(root, ARTICLE_ELEMENT))
    logger.debug("Decoded %s articles", len(articles))
    return ArticleCatalog(
        created_at=created_at,
        info_message=_extract_text(_child(_child(root, "info"), "meddelande")),
        articles=articles,
    )


def decode_stores(source: Any) -> StoreDirectory:
    """Decode a store directory document. Accepts the same sources as :func:`decode_articles`."""
    root = _parse_document(source)

    stores = tuple(_build_record(Store, item, STORE_TAGS) for item in _iter_items(root, STORE_ELEMENT))
    logger.debug("Decoded %s stores", len(stores))
    return StoreDirectory(
        info_message=_extract_text(_child(_child(root, "Info"), "Meddelande")),
        stores=stores,
    )
