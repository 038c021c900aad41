"""Keyed option store with per-key metadata."""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Callable, Iterator

from pydantic import BaseModel, ConfigDict

from fish_engine.errors import FrozenConfigMutation, InvalidOptionValue


def _always_valid(value: Any) -> bool:
    return True


def is_bool(value: Any) -> bool:
    return isinstance(value, bool)


class OptionSpec(BaseModel):
    """Descriptor for a single option."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    key: str
    name: str = ""
    description: str = ""
    default: Any = None
    predicate: Callable[[Any], bool] = _always_valid

    @property
    def display_name(self) -> str:
        return self.name or self.key


class FrozenOptions(Mapping):
    """Read-only view of option values taken when a store is frozen."""

    def __init__(self, specs: dict[str, OptionSpec], values: dict[str, Any]):
        self._specs = MappingProxyType(dict(specs))
        self._values = MappingProxyType(dict(values))

    def name_for(self, key: str) -> str:
        return self._specs[key].display_name

    def description_for(self, key: str) -> str:
        return self._specs[key].description

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"FrozenOptions({dict(self._values)!r})"


class Options:
    """Mutable option store, frozen once a game is built from it.

    Values are validated against their spec's predicate on every `set`.
    Unknown keys raise KeyError.
    """

    def __init__(self, specs: list[OptionSpec]):
        """Initialize option store.

        Args:
            specs: Option descriptors; defaults become the initial values.
        """
        self._specs: dict[str, OptionSpec] = {}
        self._values: dict[str, Any] = {}
        self._frozen = False

        for spec in specs:
            if not spec.key:
                raise ValueError(f"Bad option spec: no key on {spec!r}")
            self._specs[spec.key] = spec
            self._values[spec.key] = spec.default

    @property
    def listing(self) -> list[str]:
        """Option keys in declaration order."""
        return list(self._specs)

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def has(self, key: str) -> bool:
        return key in self._specs

    def name_for(self, key: str) -> str:
        return self._spec(key).display_name

    def description_for(self, key: str) -> str:
        return self._spec(key).description

    def get(self, key: str) -> Any:
        self._spec(key)
        return self._values[key]

    def set(self, key: str, value: Any) -> "Options":
        """Set an option value.

        Raises:
            FrozenConfigMutation: If the store has been frozen.
            InvalidOptionValue: If the value fails the option's predicate.
        """
        spec = self._spec(key)
        if self._frozen:
            raise FrozenConfigMutation(f"Cannot set {key!r}: options are frozen")
        if not spec.predicate(value):
            raise InvalidOptionValue(f"Value {value!r} is not valid for option {key!r}")
        self._values[key] = value
        return self

    def freeze(self) -> FrozenOptions:
        """Freeze the store and return an immutable snapshot.

        Raises:
            FrozenConfigMutation: If already frozen.
        """
        if self._frozen:
            raise FrozenConfigMutation("Options are already frozen")
        self._frozen = True
        return FrozenOptions(self._specs, self._values)

    def _spec(self, key: str) -> OptionSpec:
        try:
            return self._specs[key]
        except KeyError:
            raise KeyError(f"Unknown option: {key}") from None

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "open"
        return f"Options({self._values!r}, {state})"
