"""Category preset resolution.

A preset is an outside hint about which category to show: a click on one of
the "core product range" buttons, or a selector persisted by an earlier visit.
Every hint is wrapped in a PresetSignal with its own generation number and
moves through UNCONSUMED -> CONSUMING -> CONSUMED exactly once.
"""

import enum
import json
import logging
import re
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Protocol

from pydantic import BaseModel, ConfigDict

from tradecounter.schemas.catalogue import CategoryResponse

logger = logging.getLogger(__name__)

PRESET_KEY = "cb_category_name"


class PresetStore(Protocol):
    """Durable client-side key/value store."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class MemoryPresetStore:
    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class FilePresetStore:
    """JSON file backed store.

    Storage failures are logged and otherwise ignored: a lost preset only
    means the catalogue opens on its default category.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning(f"Preset store {self.path} unreadable: {exc}")
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict[str, str]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(data), encoding="utf-8")
        except OSError as exc:
            logger.warning(f"Preset store {self.path} not writable: {exc}")

    def get(self, key: str) -> str | None:
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def delete(self, key: str) -> None:
        data = self._read()
        if data.pop(key, None) is not None:
            self._write(data)


class PresetSource(str, enum.Enum):
    DIRECT = "direct"
    PERSISTED = "persisted"


class PresetStatus(str, enum.Enum):
    UNCONSUMED = "unconsumed"
    CONSUMING = "consuming"
    CONSUMED = "consumed"


class PresetSignal(BaseModel):
    model_config = ConfigDict(frozen=True)

    selector: str
    source: PresetSource
    generation: int


class Resolution(BaseModel):
    signal: PresetSignal
    category: CategoryResponse | None
    matched: bool


# ── Selector matching ──────────────────────────────

def normalize(text: str) -> str:
    return text.strip().lower()


def loosen(text: str) -> str:
    """Lowercase, punctuation to spaces, whitespace collapsed."""
    return " ".join(re.sub(r"[\W_]+", " ", normalize(text)).split())


def slugify(text: str) -> str:
    return "-".join(loosen(text).split())


def match_category(selector: str, categories: Sequence[CategoryResponse]) -> CategoryResponse | None:
    """Exact slug, then exact name, then name-contains. First match wins."""
    needle = normalize(selector)
    if not needle:
        return None
    loose = loosen(selector)
    slug = slugify(selector)

    for category in categories:
        if normalize(category.slug) in (needle, slug):
            return category
    for category in categories:
        if normalize(category.name) == needle or (loose and loosen(category.name) == loose):
            return category
    if loose:
        for category in categories:
            if loose in loosen(category.name):
                return category
    return None


class PresetResolver:
    def __init__(
        self,
        store: PresetStore,
        on_consumed: Callable[[PresetSignal], None] | None = None,
    ):
        self._store = store
        self._on_consumed = on_consumed
        self._generation = 0
        self._consumed_generation = 0
        self._consuming: int | None = None
        self.pending: PresetSignal | None = None
        self.last_applied: str | None = None

    def status_of(self, signal: PresetSignal) -> PresetStatus:
        if signal.generation <= self._consumed_generation:
            return PresetStatus.CONSUMED
        if signal.generation == self._consuming:
            return PresetStatus.CONSUMING
        return PresetStatus.UNCONSUMED

    def offer(self, selector: str | None, source: PresetSource = PresetSource.DIRECT) -> PresetSignal | None:
        """Raise a new signal. Blank selectors are ignored."""
        if not selector or not selector.strip():
            return None
        self._generation += 1
        self.pending = PresetSignal(selector=selector, source=source, generation=self._generation)
        return self.pending

    def persist(self, selector: str) -> None:
        self._store.set(PRESET_KEY, selector)

    def restore(self) -> PresetSignal | None:
        """Turn a selector left in the durable store into a signal, unless one is already pending."""
        if self.pending is not None:
            return None
        return self.offer(self._store.get(PRESET_KEY), PresetSource.PERSISTED)

    def apply(
        self,
        categories: Sequence[CategoryResponse],
        current_category_id: int | None,
        signal: PresetSignal | None = None,
    ) -> Resolution | None:
        """Resolve ``signal`` (default: the pending one) against ``categories``.

        Returns None when there is nothing to do: no signal, a signal already
        consumed, no categories loaded yet (the signal stays pending), or a
        selector equal to the last one applied. That last case consumes the
        signal without firing ``on_consumed``.
        """
        signal = signal or self.pending
        if signal is None or self.status_of(signal) is not PresetStatus.UNCONSUMED:
            return None
        if not categories:
            logger.debug(f"Preset {signal.selector!r} deferred until categories load")
            return None

        if signal.selector == self.last_applied:
            self._store.delete(PRESET_KEY)
            self._finish(signal)
            logger.debug(f"Preset {signal.selector!r} already applied")
            return None

        self._consuming = signal.generation
        candidates = [signal.selector]
        persisted = self._store.get(PRESET_KEY)
        if persisted and persisted not in candidates:
            candidates.append(persisted)

        match = None
        for selector in candidates:
            match = match_category(selector, categories)
            if match is not None:
                break
        self._store.delete(PRESET_KEY)

        category = match
        if category is None and current_category_id is None:
            category = categories[0]

        self._finish(signal)
        self.last_applied = signal.selector

        if match is None:
            logger.info(f"Preset {signal.selector!r} matched no category")
        else:
            logger.info(f"Preset {signal.selector!r} resolved to category {match.slug}")

        if self._on_consumed is not None:
            self._on_consumed(signal)
        return Resolution(signal=signal, category=category, matched=match is not None)

    def _finish(self, signal: PresetSignal) -> None:
        self._consumed_generation = signal.generation
        self._consuming = None
        if self.pending == signal:
            self.pending = None
