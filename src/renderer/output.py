# renderer/output.py
import os
from typing import TextIO, Union
import numpy as np
from PIL import Image

def write_ppm(image: np.ndarray, target: Union[str, os.PathLike, TextIO]):
    """
    Writes an 8-bit (height, width, 3) image as plain-text PPM (P3), top row first.
    `target` is a path or an open text stream.
    """
    if hasattr(target, "write"):
        _write_ppm_stream(image, target)
        return
    with open(target, "w") as stream:
        _write_ppm_stream(image, stream)

def _write_ppm_stream(image: np.ndarray, stream: TextIO):
    height, width = image.shape[:2]
    stream.write(f"P3\n{width} {height}\n255\n")
    for row in image:
        stream.write(" ".join(f"{r} {g} {b}" for r, g, b in row.tolist()))
        stream.write("\n")

def save_image(image: np.ndarray, path: Union[str, os.PathLike]):
    """
    Saves an 8-bit image. `.ppm` paths are written as plain-text PPM, anything
    else goes through Pillow and its format is picked from the extension.
    """
    directory = os.path.dirname(os.fspath(path))
    if directory:
        os.makedirs(directory, exist_ok=True)

    if os.fspath(path).lower().endswith(".ppm"):
        write_ppm(image, path)
        return
    Image.fromarray(np.ascontiguousarray(image, dtype=np.uint8)).save(path)
