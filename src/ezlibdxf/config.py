from __future__ import annotations

from dataclasses import dataclass

GRAPHICS_DATA_SIZE_CODES = (92, 160)


@dataclass(frozen=True)
class WriterOptions:
    # Legacy elevation (group 38) is only written for R11 and older when set.
    flatland: bool = False
    # 92 on 32-bit builds, 160 on 64-bit builds; never both.
    graphics_data_size_code: int = 92

    def __post_init__(self) -> None:
        if self.graphics_data_size_code not in GRAPHICS_DATA_SIZE_CODES:
            raise ValueError(
                f"graphics_data_size_code must be one of {GRAPHICS_DATA_SIZE_CODES}, "
                f"got {self.graphics_data_size_code!r}"
            )


DEFAULT_OPTIONS = WriterOptions()
