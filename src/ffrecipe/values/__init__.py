"""Value parsers.

Every loosely formatted parameter is parsed into an immutable value before
compilation. Parsers are pure: they do no I/O and raise
:class:`~ffrecipe.exceptions.ParseError` on invalid input.
"""

from ffrecipe.values.audio import (
    AudioFormat,
    AudioSyncDirection,
    VisualizationStyle,
    VolumeAdjustment,
)
from ffrecipe.values.color import (
    ChromaKeyColor,
    ColorGradePreset,
    ColorPreset,
    Colorspace,
    FilterAdjustments,
)
from ffrecipe.values.delivery import (
    SocialCropShape,
    SocialPlatform,
    TransitionType,
    VintageEra,
)
from ffrecipe.values.encoding import (
    ConvertFormat,
    MetadataField,
    MetadataFormat,
    QualityPreset,
    VideoCodec,
)
from ffrecipe.values.geometry import (
    BlurRegion,
    BlurType,
    FlipDirection,
    GridLayout,
    MirrorDirection,
    ResizeTarget,
    RotateDegrees,
    SpeedFactor,
    SplitScreenOrientation,
)
from ffrecipe.values.overlay import (
    Anchor,
    Opacity,
    PipPosition,
    TextAnimation,
    TextColor,
    TextPosition,
    TextStyle,
    WatermarkPosition,
    WatermarkSize,
)
from ffrecipe.values.size import CompressTarget, TargetBitrate, TargetSize
from ffrecipe.values.timing import (
    ComparisonOperator,
    Duration,
    ProcessingCondition,
    SplitMode,
    Time,
)

__all__ = [
    # Timing
    "Time",
    "Duration",
    "SplitMode",
    "ComparisonOperator",
    "ProcessingCondition",
    # Size and rate
    "TargetSize",
    "TargetBitrate",
    "CompressTarget",
    # Geometry
    "SpeedFactor",
    "RotateDegrees",
    "FlipDirection",
    "MirrorDirection",
    "SplitScreenOrientation",
    "ResizeTarget",
    "BlurRegion",
    "BlurType",
    "GridLayout",
    # Overlay
    "Anchor",
    "Opacity",
    "WatermarkPosition",
    "WatermarkSize",
    "PipPosition",
    "TextPosition",
    "TextColor",
    "TextStyle",
    "TextAnimation",
    # Colour
    "FilterAdjustments",
    "ColorPreset",
    "ColorGradePreset",
    "ChromaKeyColor",
    "Colorspace",
    # Audio
    "VolumeAdjustment",
    "AudioSyncDirection",
    "AudioFormat",
    "VisualizationStyle",
    # Encoding
    "QualityPreset",
    "VideoCodec",
    "ConvertFormat",
    "MetadataField",
    "MetadataFormat",
    # Delivery
    "SocialPlatform",
    "SocialCropShape",
    "TransitionType",
    "VintageEra",
]
