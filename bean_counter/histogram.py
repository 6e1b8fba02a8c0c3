from __future__ import annotations

import datetime
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from PIL import Image, ImageDraw

from .config import Frequency, MachineConfig
from .machine import BeanMachine


@dataclass
class SlotHistogram:
    machine: BeanMachine
    width: int = field(default=MachineConfig.HISTOGRAM_WIDTH)
    height: int = field(default=MachineConfig.HISTOGRAM_HEIGHT)
    image: Optional[Image.Image] = field(init=False, default=None)
    draw: Optional[ImageDraw.ImageDraw] = field(init=False, default=None)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Histogram dimensions must be positive.")

    def _prepare_drawing_surface(self) -> None:
        self.image = Image.new(
            "RGB", (self.width, self.height), MachineConfig.BACKGROUND_COLOR
        )
        self.draw = ImageDraw.Draw(self.image)

    def generate_image(self) -> Image.Image:
        self._prepare_drawing_surface()
        assert self.image is not None, "Image should be initialized"

        counts = self.machine.slot_counts()
        max_frequency = max(counts, default=0)
        if max_frequency <= 0:
            logging.info("No beans in slots; returning blank image.")
            return self.image

        bar_width = max(MachineConfig.HISTOGRAM_BAR_MIN_WIDTH, self.width // len(counts))
        self._draw_all_bars(counts, max_frequency, bar_width)
        return self.image

    def _draw_all_bars(
        self, counts: List[Frequency], max_frequency: int, bar_width: int
    ) -> None:
        assert self.draw is not None, "Draw context must exist"
        half_width = self.width // 2
        for idx, frequency in enumerate(counts):
            x_start = idx * bar_width
            bar_height = int(frequency / max_frequency * self.height)
            if frequency <= 0 or bar_height <= 0 or x_start >= self.width:
                continue
            x_end = min(x_start + bar_width, self.width)
            color = (
                MachineConfig.LEFT_COLOR
                if x_start < half_width
                else MachineConfig.RIGHT_COLOR
            )
            self.draw.rectangle(
                (x_start, self.height - bar_height, x_end, self.height), fill=color
            )

    def save_image(self, filename: Optional[str | Path] = None) -> Path:
        current_image = self.generate_image()
        if filename:
            output_path = Path(filename).resolve()
        else:
            output_path = generate_unique_filename(
                MachineConfig.DEFAULT_IMAGE_BASENAME, ".png"
            )
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            current_image.save(output_path)
        except (OSError, ValueError) as exc:
            logging.error(f"Failed to save image to {output_path}: {exc}")
            raise
        logging.info(f"Image successfully saved: {output_path}")
        return output_path


def generate_unique_filename(base_name: str, suffix: str) -> Path:
    timestamp = datetime.datetime.now(datetime.timezone.utc).strftime(
        "%Y%m%d_%H%M%S_%f"
    )
    return Path(f"{base_name}_{timestamp}{suffix}").resolve()
