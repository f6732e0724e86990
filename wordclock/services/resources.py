from __future__ import annotations
from pathlib import Path

RES_DIR = Path(__file__).resolve().parent.parent / "res"

RESOURCES = {
    "words_cet4": "words_cet4.tsv",
}


def resource_path(name: str) -> Path | None:
    fn = RESOURCES.get(name)
    if not fn:
        return None
    return RES_DIR / fn


def load_resource(name: str) -> bytes | None:
    p = resource_path(name)
    if p is None or not p.exists():
        return None
    data = p.read_bytes()
    return data or None


def resource_loader(name: str = "words_cet4"):
    return lambda: load_resource(name)


FONTS_DIR = RES_DIR / "fonts"

# CJK + IPA; erstes vorhandenes File gewinnt
FONT_FILES = (
    "NotoSansCJKsc-Regular.otf",
    "NotoSansSC-Regular.ttf",
    "NotoSansCJK-Regular.ttc",
    "SarasaUiSC-Regular.ttf",
)


def find_font(dirs=None, names=FONT_FILES) -> Path | None:
    for d in (dirs if dirs is not None else [FONTS_DIR]):
        for fn in names:
            p = Path(d) / fn
            if p.is_file():
                return p
    return None
