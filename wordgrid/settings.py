import os
from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class Settings:
    BASE_DIR: Path = field(default_factory=lambda: Path(__file__).resolve().parent.parent)

    DICTIONARY_PATH: Path = field(init=False)
    DEBUG_DIR: Path = field(init=False)

    MIN_WORD_LENGTH: int = 2
    GRID_SIZE_FACTOR: int = 2
    SHUFFLE_CANDIDATES: bool = True
    MAX_LETTERS: int = 12
    MAX_WORDS: int = 0  # 0 = every constructible word
    RANDOM_SEED: int = -1  # negative = unseeded

    DEBUG: bool = False
    PORT: int = 10001

    def __post_init__(self):
        self.DICTIONARY_PATH = self.BASE_DIR / "dictionary.txt"
        self.DEBUG_DIR = self.BASE_DIR / "debug"

        # Override from environment
        for fld in self.__dataclass_fields__:
            env_val = os.environ.get(fld)
            if env_val is not None:
                setattr(self, fld, _coerce(getattr(self, fld), env_val))


# Fields that may be changed at runtime through the settings API
EDITABLE_FIELDS: dict[str, type] = {
    "GRID_SIZE_FACTOR": int,
    "SHUFFLE_CANDIDATES": bool,
    "MAX_LETTERS": int,
    "MAX_WORDS": int,
    "DEBUG": bool,
}

# Smallest accepted value for int fields; the rest default to 0
MINIMUMS: dict[str, int] = {
    "GRID_SIZE_FACTOR": 1,
    "MAX_LETTERS": 1,
}


def _coerce(current, value):
    if isinstance(current, bool):
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.lower() in ("1", "true", "yes")
        raise ValueError(f"expected bool, got {value!r}")
    if isinstance(current, int):
        if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
            raise ValueError(f"expected int, got {value!r}")
        return int(value)
    if isinstance(current, float):
        return float(value)
    if isinstance(current, Path):
        return Path(value)
    return str(value)


def get_editable_settings(cfg: Settings) -> dict:
    return {name: getattr(cfg, name) for name in EDITABLE_FIELDS}


def update_settings(cfg: Settings, **values) -> dict[str, str]:
    """Apply editable values in place. Returns per-field errors; valid fields still update."""
    errors: dict[str, str] = {}
    for name, value in values.items():
        if name not in EDITABLE_FIELDS:
            errors[name] = "unknown field" if not hasattr(cfg, name) else "not editable"
            continue
        try:
            new_value = _coerce(getattr(cfg, name), value)
        except (TypeError, ValueError) as e:
            errors[name] = str(e)
            continue
        minimum = MINIMUMS.get(name, 0)
        if EDITABLE_FIELDS[name] is int and new_value < minimum:
            errors[name] = f"must be >= {minimum}"
            continue
        setattr(cfg, name, new_value)
    return errors


settings = Settings()
