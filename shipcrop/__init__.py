from .cords import LABEL_CONFIGS, CropRegion, LabelConfig, load_registry, resolve_action
from .errors import (
    InvalidCropRegion,
    MalformedDocument,
    PipelineBusy,
    SerializationFailure,
    ShipCropError,
    TextLayerUnavailable,
    UnknownPlatform,
    UnknownVariantOrOption,
)
from .pipeline import LabelPipeline, LabelRequest, Mode, process_labels

__all__ = [
    "LABEL_CONFIGS",
    "CropRegion",
    "LabelConfig",
    "load_registry",
    "resolve_action",
    "InvalidCropRegion",
    "MalformedDocument",
    "PipelineBusy",
    "SerializationFailure",
    "ShipCropError",
    "TextLayerUnavailable",
    "UnknownPlatform",
    "UnknownVariantOrOption",
    "LabelPipeline",
    "LabelRequest",
    "Mode",
    "process_labels",
]
