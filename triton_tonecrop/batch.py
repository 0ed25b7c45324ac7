"""
Batch processing: an ordered list of input images, one output file each.

Author: yuhezhang-ai
"""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from . import config
from .codec import read_ppm, write_pgm
from .errors import ImageIOError
from .pipeline import ImagePipeline
from .utils import log


OUTPUT_EXTENSION = '.pgm'


def output_name(identifier: str | Path, suffix: Optional[str] = None) -> str:
    """
    Derive an output file name from an input identifier.

    The directory part is dropped, the extension is replaced with .pgm and
    the suffix is inserted before it.

    Example:
        ```python
        output_name("images/cat.ppm")  # 'cat_tonecrop.pgm'
        output_name("dog", "_gray")   # 'dog_gray.pgm'
        ```
    """
    if suffix is None:
        suffix = config.OUTPUT_SUFFIX
    stem = Path(identifier).stem
    if not stem:
        raise ValueError(f"Cannot derive an output name from {identifier!r}")
    return f"{stem}{suffix}{OUTPUT_EXTENSION}"


@dataclass(frozen=True)
class Batch:
    """
    Ordered set of images to process.

    Args:
        identifiers: Input files, processed in this order
        output_dir: Directory for outputs; created on demand
        input_dir: Base directory for relative identifiers (None: current directory)
        suffix: Output name suffix (None: config.OUTPUT_SUFFIX)
    """
    identifiers: tuple
    output_dir: Path
    input_dir: Optional[Path] = None
    suffix: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, 'identifiers', tuple(str(i) for i in self.identifiers))
        object.__setattr__(self, 'output_dir', Path(self.output_dir))
        if self.input_dir is not None:
            object.__setattr__(self, 'input_dir', Path(self.input_dir))

    @classmethod
    def from_list_file(cls, path: str | Path, output_dir: str | Path, **kwargs) -> "Batch":
        """
        Read identifiers from a text file, one per line.

        Blank lines and lines starting with '#' are skipped.

        Raises:
            ImageIOError: If the list file cannot be read
        """
        path = Path(path)
        try:
            lines = path.read_text(encoding='utf-8').splitlines()
        except OSError as e:
            raise ImageIOError(f"{path}: failed to read batch list: {e}") from e

        identifiers = [
            line.strip() for line in lines
            if line.strip() and not line.lstrip().startswith('#')
        ]
        return cls(identifiers=tuple(identifiers), output_dir=Path(output_dir), **kwargs)

    def input_path(self, identifier: str) -> Path:
        path = Path(identifier)
        if self.input_dir is not None and not path.is_absolute():
            return self.input_dir / path
        return path

    def output_path(self, identifier: str) -> Path:
        return self.output_dir / output_name(identifier, self.suffix)

    def __len__(self):
        return len(self.identifiers)


def run_batch(batch: Batch, pipeline: Optional[ImagePipeline] = None) -> List[Path]:
    """
    Process every image in the batch, in order, one at a time.

    Each image is read, transformed and written before the next one is
    read. The first error stops the batch and propagates; images already
    written stay on disk.

    Args:
        batch: What to process and where to write it
        pipeline: Pipeline to use (default: a fresh ImagePipeline)

    Returns:
        Paths of the written files, in batch order

    Raises:
        ImageIOError: Unreadable input, bad header, or unwritable output
        DeviceResourceError: Device allocation or transfer failure
    """
    if pipeline is None:
        pipeline = ImagePipeline()

    try:
        batch.output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ImageIOError(f"{batch.output_dir}: cannot create output directory: {e}") from e

    written = []
    total = len(batch)
    for index, identifier in enumerate(batch.identifiers, start=1):
        source = batch.input_path(identifier)
        target = batch.output_path(identifier)

        with read_ppm(source) as rgb:
            log(f"[{index}/{total}] {source} ({rgb.width}x{rgb.height})")
            with pipeline.process(rgb) as result:
                write_pgm(result, target)

        log(f"[{index}/{total}] wrote {target}")
        written.append(target)

    return written


__all__ = [
    'OUTPUT_EXTENSION',
    'output_name',
    'Batch',
    'run_batch',
]
