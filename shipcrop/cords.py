"""
Crop coordinates for the supported marketplaces.

Regions are written the way they are measured on a page image: origin at
the top-left corner, y growing downward, all values in PDF points.
PDF page boxes use a bottom-left origin, so every region is translated
per page with that page's own height (see ``to_page_box``).
"""

import json
import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional, Tuple, Union

from .errors import InvalidCropRegion, UnknownPlatform, UnknownVariantOrOption

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class CropRegion:
    tlx: float
    tly: float
    brx: float
    bry: float

    def __post_init__(self):
        if self.brx <= self.tlx or self.bry <= self.tly:
            raise InvalidCropRegion(
                f"Crop region ({self.tlx}, {self.tly}, {self.brx}, {self.bry}) has no area"
            )

    @property
    def width(self):
        return self.brx - self.tlx

    @property
    def height(self):
        return self.bry - self.tly


@dataclass(frozen=True)
class Variant:
    id: str
    label: str
    region: CropRegion


@dataclass(frozen=True)
class PageOption:
    id: str
    label: str


@dataclass(frozen=True)
class LabelConfig:
    id: str
    label: str
    logo: str
    region: CropRegion
    variants: Tuple[Variant, ...] = ()
    options: Tuple[PageOption, ...] = ()
    disable_crop: bool = False

    def variant(self, variant_id):
        for variant in self.variants:
            if variant.id == variant_id:
                return variant
        raise UnknownVariantOrOption(f"{self.id} has no variant {variant_id!r}")

    def option(self, option_id):
        for option in self.options:
            if option.id == option_id:
                return option
        raise UnknownVariantOrOption(f"{self.id} has no option {option_id!r}")


def to_page_box(region: CropRegion, page_height: float) -> Tuple[float, float, float, float]:
    """Return ``(x, y, width, height)`` of ``region`` in bottom-left page space."""
    return region.tlx, page_height - region.bry, region.width, region.height


def from_page_box(box: Tuple[float, float, float, float], page_height: float) -> CropRegion:
    """Inverse of ``to_page_box``."""
    x, y, width, height = box
    bry = page_height - y
    return CropRegion(x, bry - height, x + width, bry)


def keep_order_pages(index: int) -> bool:
    # label and invoice pages alternate; labels sit at 0, 2, 4, ...
    return index % 2 == 0


PAGE_FILTERS: Dict[str, Callable[[int], bool]] = {
    "order_page": keep_order_pages,
}


LABEL_CONFIGS: Dict[str, LabelConfig] = {
    "FLIPKART": LabelConfig(
        id="FLIPKART",
        label="Flipkart",
        logo="./Flipkart.jpg",
        region=CropRegion(188, 28, 407, 381),
    ),
    "MEESHO": LabelConfig(
        id="MEESHO",
        label="Meesho",
        logo="./Meesho.jpg",
        region=CropRegion(0, 0, 600, 660),
        variants=(
            Variant("without_invoice", "Without Invoice", CropRegion(0, 0, 600, 358)),
            Variant("with_invoice", "With Invoice", CropRegion(0, 0, 600, 660)),
        ),
    ),
    "AMAZON": LabelConfig(
        id="AMAZON",
        label="Amazon",
        logo="./Amazon.jpg",
        region=CropRegion(0, 0, 210, 465),
        options=(PageOption("order_page", "Select Only Order Page"),),
        disable_crop=True,
    ),
}


def _region_from_json(entry):
    return CropRegion(
        float(entry["tlx"]), float(entry["tly"]), float(entry["brx"]), float(entry["bry"])
    )


def config_from_json(platform_id, entry) -> LabelConfig:
    """Build a LabelConfig from one entry of a JSON registry file."""
    return LabelConfig(
        id=platform_id,
        label=entry.get("label", platform_id),
        logo=entry.get("logo", ""),
        region=_region_from_json(entry),
        variants=tuple(
            Variant(v["id"], v.get("label", v["id"]), _region_from_json(v))
            for v in entry.get("variants", ())
        ),
        options=tuple(
            PageOption(o["id"], o.get("label", o["id"])) for o in entry.get("options", ())
        ),
        disable_crop=bool(entry.get("disableCrop", False)),
    )


def load_registry(path, base: Optional[Dict[str, LabelConfig]] = None) -> Dict[str, LabelConfig]:
    """
    Read platform entries from a JSON file.
    Entries replace those of ``base`` (the built-in table by default) with the same id.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{path} must hold an object of platform entries")
    registry = dict(LABEL_CONFIGS if base is None else base)
    for platform_id, entry in data.items():
        registry[platform_id] = config_from_json(platform_id, entry)
        LOGGER.debug("Loaded platform %s from %s", platform_id, path)
    return registry


@dataclass(frozen=True)
class CropAction:
    region: CropRegion
    keep: Optional[Callable[[int], bool]] = None


@dataclass(frozen=True)
class FilterAction:
    keep: Callable[[int], bool]


@dataclass(frozen=True)
class Passthrough:
    pass


PageAction = Union[CropAction, FilterAction, Passthrough]


def get_config(platform_id, registry=None) -> LabelConfig:
    registry = LABEL_CONFIGS if registry is None else registry
    try:
        return registry[platform_id]
    except KeyError:
        raise UnknownPlatform(f"Unknown platform {platform_id!r}") from None


def resolve_region(config: LabelConfig, variant_id=None) -> CropRegion:
    """A variant's region replaces the base region as a whole."""
    if variant_id is None:
        return config.region
    return config.variant(variant_id).region


def resolve_filter(config: LabelConfig, option_ids: Iterable[str] = ()) -> Optional[Callable[[int], bool]]:
    predicates = []
    for option_id in option_ids:
        config.option(option_id)
        if option_id not in PAGE_FILTERS:
            raise UnknownVariantOrOption(f"Option {option_id!r} has no page filter")
        predicates.append(PAGE_FILTERS[option_id])
    if not predicates:
        return None
    if len(predicates) == 1:
        return predicates[0]
    return lambda index: all(p(index) for p in predicates)


def resolve_action(platform_id, variant_id=None, option_ids: Iterable[str] = (), registry=None) -> PageAction:
    """Pick the single page action for a run. Unknown ids raise before any document is touched."""
    if platform_id is None:
        if variant_id is not None or option_ids:
            raise UnknownVariantOrOption("Variants and options need a platform")
        return Passthrough()
    config = get_config(platform_id, registry)
    region = resolve_region(config, variant_id)
    keep = resolve_filter(config, tuple(option_ids))
    if config.disable_crop:
        return FilterAction(keep) if keep is not None else Passthrough()
    return CropAction(region, keep)
