"""Operation requests consumed by the compiler.

Each request is an immutable record of one operation: its input path(s),
the output path (or output directory for multi-file results) and the
validated parameters. Requests are built by the CLI or any other caller;
the compiler never parses text.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from ffrecipe.values import (
    AudioFormat,
    AudioSyncDirection,
    BlurType,
    ChromaKeyColor,
    ColorGradePreset,
    ColorPreset,
    Colorspace,
    CompressTarget,
    ConvertFormat,
    Duration,
    FilterAdjustments,
    FlipDirection,
    GridLayout,
    MetadataField,
    MetadataFormat,
    MirrorDirection,
    Opacity,
    PipPosition,
    QualityPreset,
    ResizeTarget,
    RotateDegrees,
    SocialCropShape,
    SocialPlatform,
    SpeedFactor,
    SplitMode,
    SplitScreenOrientation,
    TextAnimation,
    TextPosition,
    TextStyle,
    Time,
    TransitionType,
    VideoCodec,
    VintageEra,
    VisualizationStyle,
    VolumeAdjustment,
    WatermarkPosition,
    WatermarkSize,
)


@dataclass(frozen=True)
class Request:
    """Base class for all operation requests."""

    @property
    def operation(self) -> str:
        """Kebab-case operation name derived from the class name."""
        name = type(self).__name__.removesuffix("Request")
        out = []
        for i, ch in enumerate(name):
            if ch.isupper() and i:
                out.append("-")
            out.append(ch.lower())
        return "".join(out)


# =============================================================================
# Conversion
# =============================================================================


@dataclass(frozen=True)
class ConvertRequest(Request):
    """Convert to a format. For HLS and DASH ``output`` is a directory."""

    input: Path
    output: Path
    format: ConvertFormat = ConvertFormat.MP4
    quality: QualityPreset | None = None
    codec: VideoCodec | None = None


@dataclass(frozen=True)
class AnimatedGifRequest(Request):
    input: Path
    output: Path
    loop: bool = True
    optimize: bool = False


@dataclass(frozen=True)
class ConvertColorspaceRequest(Request):
    input: Path
    output: Path
    target: Colorspace = Colorspace.REC709


@dataclass(frozen=True)
class HdrToSdrRequest(Request):
    input: Path
    output: Path


@dataclass(frozen=True)
class FixFramerateRequest(Request):
    input: Path
    output: Path


@dataclass(frozen=True)
class ProxyRequest(Request):
    input: Path
    output: Path


@dataclass(frozen=True)
class SocialConvertRequest(Request):
    input: Path
    output: Path
    platform: SocialPlatform = SocialPlatform.INSTAGRAM


@dataclass(frozen=True)
class SocialCropRequest(Request):
    input: Path
    output: Path
    shape: SocialCropShape = SocialCropShape.SQUARE


@dataclass(frozen=True)
class VerticalConvertRequest(Request):
    input: Path
    output: Path


@dataclass(frozen=True)
class StoryFormatRequest(Request):
    input: Path
    output: Path


@dataclass(frozen=True)
class CompressRequest(Request):
    input: Path
    output: Path
    target: CompressTarget
    two_pass: bool = False


# =============================================================================
# Editing
# =============================================================================


@dataclass(frozen=True)
class TrimRequest(Request):
    input: Path
    output: Path
    start: Time
    end: Time


@dataclass(frozen=True)
class ResizeRequest(Request):
    input: Path
    output: Path
    target: ResizeTarget


@dataclass(frozen=True)
class ChangeSpeedRequest(Request):
    """Speed up by ``factor``, or slow down by it when ``slow_down`` is set."""

    input: Path
    output: Path
    factor: SpeedFactor
    slow_down: bool = False


@dataclass(frozen=True)
class ReverseRequest(Request):
    input: Path
    output: Path


@dataclass(frozen=True)
class MuteRequest(Request):
    input: Path
    output: Path


@dataclass(frozen=True)
class RotateRequest(Request):
    input: Path
    output: Path
    degrees: RotateDegrees


@dataclass(frozen=True)
class FlipRequest(Request):
    input: Path
    output: Path
    direction: FlipDirection


@dataclass(frozen=True)
class MirrorRequest(Request):
    input: Path
    output: Path
    direction: MirrorDirection


@dataclass(frozen=True)
class CropRequest(Request):
    input: Path
    output: Path
    width: int
    height: int


@dataclass(frozen=True)
class SetFpsRequest(Request):
    input: Path
    output: Path
    fps: int


@dataclass(frozen=True)
class InterpolateRequest(Request):
    input: Path
    output: Path
    fps: int = 60


@dataclass(frozen=True)
class LoopRequest(Request):
    input: Path
    output: Path
    times: int = 2


@dataclass(frozen=True)
class ConcatRequest(Request):
    """Join videos end to end. Merge is a concat of two inputs."""

    inputs: tuple[Path, ...]
    output: Path


@dataclass(frozen=True)
class AddAudioRequest(Request):
    video: Path
    audio: Path
    output: Path


@dataclass(frozen=True)
class SplitRequest(Request):
    input: Path
    output_dir: Path
    mode: SplitMode


@dataclass(frozen=True)
class ExtractFramesRequest(Request):
    input: Path
    output_dir: Path
    interval: Duration


@dataclass(frozen=True)
class ThumbnailRequest(Request):
    input: Path
    output: Path
    time: Time = field(default_factory=Time)


@dataclass(frozen=True)
class ThumbnailGridRequest(Request):
    input: Path
    output: Path
    layout: GridLayout = field(default_factory=lambda: GridLayout(3, 3))


@dataclass(frozen=True)
class PreviewRequest(Request):
    input: Path
    output: Path


@dataclass(frozen=True)
class FixRotationRequest(Request):
    input: Path
    output: Path


@dataclass(frozen=True)
class RepairRequest(Request):
    input: Path
    output: Path


@dataclass(frozen=True)
class SetMetadataRequest(Request):
    input: Path
    output: Path
    key: MetadataField
    value: str


# =============================================================================
# Audio
# =============================================================================


@dataclass(frozen=True)
class ExtractAudioRequest(Request):
    """Extract the audio track, optionally only ``start``..``end``.

    The output extension is forced to match ``format``.
    """

    input: Path
    output: Path
    format: AudioFormat = AudioFormat.M4A
    start: Time | None = None
    end: Time | None = None


@dataclass(frozen=True)
class AdjustVolumeRequest(Request):
    input: Path
    output: Path
    adjustment: VolumeAdjustment


@dataclass(frozen=True)
class NormalizeRequest(Request):
    input: Path
    output: Path


@dataclass(frozen=True)
class SyncAudioRequest(Request):
    input: Path
    output: Path
    direction: AudioSyncDirection
    offset: Duration


@dataclass(frozen=True)
class MixAudioRequest(Request):
    first: Path
    second: Path
    output: Path


@dataclass(frozen=True)
class FadeRequest(Request):
    input: Path
    output: Path
    fade_in: Duration | None = None
    fade_out: Duration | None = None


@dataclass(frozen=True)
class NoiseReductionRequest(Request):
    input: Path
    output: Path


@dataclass(frozen=True)
class EchoRemovalRequest(Request):
    input: Path
    output: Path


@dataclass(frozen=True)
class AudioDuckingRequest(Request):
    input: Path
    output: Path


@dataclass(frozen=True)
class EqualizerRequest(Request):
    """Gains for three bands. Values are divided by 20 and clamped to +-20 dB."""

    input: Path
    output: Path
    bass: int | None = None
    mid: int | None = None
    treble: int | None = None


@dataclass(frozen=True)
class VoiceIsolationRequest(Request):
    input: Path
    output: Path


@dataclass(frozen=True)
class AudioSpeedRequest(Request):
    """Change audio tempo without changing pitch."""

    input: Path
    output: Path
    factor: SpeedFactor


@dataclass(frozen=True)
class VisualizeRequest(Request):
    audio: Path
    output: Path
    style: VisualizationStyle = VisualizationStyle.WAVEFORM


# =============================================================================
# Effects
# =============================================================================


@dataclass(frozen=True)
class GrayscaleRequest(Request):
    input: Path
    output: Path


@dataclass(frozen=True)
class FilterRequest(Request):
    """Colour adjustments; a preset, when given, replaces the adjustments."""

    input: Path
    output: Path
    adjustments: FilterAdjustments = field(default_factory=FilterAdjustments)
    preset: ColorPreset | None = None


@dataclass(frozen=True)
class BlurRequest(Request):
    input: Path
    output: Path
    blur: BlurType = field(default_factory=BlurType)


@dataclass(frozen=True)
class StabilizeRequest(Request):
    input: Path
    output: Path


@dataclass(frozen=True)
class DenoiseRequest(Request):
    input: Path
    output: Path


@dataclass(frozen=True)
class MotionBlurRequest(Request):
    input: Path
    output: Path
    frames: int = 3


@dataclass(frozen=True)
class VignetteRequest(Request):
    input: Path
    output: Path
    intensity: float = 0.5
    size: float = 0.7


@dataclass(frozen=True)
class LensCorrectRequest(Request):
    input: Path
    output: Path


@dataclass(frozen=True)
class GlitchRequest(Request):
    input: Path
    output: Path
    shift: int = 3
    noise: int = 30


@dataclass(frozen=True)
class VintageFilmRequest(Request):
    input: Path
    output: Path
    era: VintageEra = VintageEra.CLASSIC


@dataclass(frozen=True)
class ColorGradeRequest(Request):
    input: Path
    output: Path
    preset: ColorGradePreset


@dataclass(frozen=True)
class BurnSubtitleRequest(Request):
    input: Path
    subtitle: Path
    output: Path


@dataclass(frozen=True)
class WatermarkRequest(Request):
    input: Path
    logo: Path
    output: Path
    position: WatermarkPosition = field(default_factory=WatermarkPosition)
    opacity: Opacity = field(default_factory=lambda: Opacity(1.0))
    size: WatermarkSize | None = None


@dataclass(frozen=True)
class AddTextRequest(Request):
    """Draw static text, or the wall-clock timestamp when ``timestamp`` is set."""

    input: Path
    output: Path
    text: str = ""
    position: TextPosition = field(default_factory=TextPosition)
    style: TextStyle = field(default_factory=TextStyle)
    timestamp: bool = False


@dataclass(frozen=True)
class AnimatedTextRequest(Request):
    input: Path
    output: Path
    text: str
    animation: TextAnimation = TextAnimation.FADE_IN
    position: TextPosition = field(default_factory=TextPosition)
    style: TextStyle = field(default_factory=TextStyle)


@dataclass(frozen=True)
class TimecodeRequest(Request):
    input: Path
    output: Path


@dataclass(frozen=True)
class PipRequest(Request):
    base: Path
    overlay: Path
    output: Path
    position: PipPosition = PipPosition.BOTTOM_RIGHT


@dataclass(frozen=True)
class RemoveBackgroundRequest(Request):
    input: Path
    output: Path
    color: ChromaKeyColor = field(default_factory=lambda: ChromaKeyColor(0, 255, 0))


@dataclass(frozen=True)
class OverlayRequest(Request):
    base: Path
    overlay: Path
    output: Path
    position: WatermarkPosition = field(default_factory=WatermarkPosition)
    opacity: Opacity = field(default_factory=lambda: Opacity(1.0))


# =============================================================================
# Composition
# =============================================================================


@dataclass(frozen=True)
class MontageRequest(Request):
    """Lay several videos out on a grid. Collage is the same operation."""

    inputs: tuple[Path, ...]
    output: Path
    layout: GridLayout


@dataclass(frozen=True)
class TileRequest(Request):
    """Repeat one video in every cell of a grid."""

    input: Path
    output: Path
    layout: GridLayout


@dataclass(frozen=True)
class SyncCamerasRequest(Request):
    inputs: tuple[Path, ...]
    output: Path


@dataclass(frozen=True)
class SplitScreenRequest(Request):
    first: Path
    second: Path
    output: Path
    orientation: SplitScreenOrientation = SplitScreenOrientation.HORIZONTAL


@dataclass(frozen=True)
class CompareRequest(Request):
    """Side-by-side comparison, optionally followed by a PSNR/SSIM pass."""

    first: Path
    second: Path
    output: Path
    metrics: bool = False


@dataclass(frozen=True)
class CrossfadeRequest(Request):
    first: Path
    second: Path
    output: Path
    duration: Duration = field(default_factory=lambda: Duration(1.0))


@dataclass(frozen=True)
class TransitionRequest(Request):
    first: Path
    second: Path
    output: Path
    transition: TransitionType = TransitionType.FADE


@dataclass(frozen=True)
class SlideshowRequest(Request):
    images: tuple[Path, ...]
    output: Path
    duration: Duration = field(default_factory=lambda: Duration(3.0))


# =============================================================================
# Analysis and generation
# =============================================================================


@dataclass(frozen=True)
class DetectScenesRequest(Request):
    input: Path


@dataclass(frozen=True)
class DetectBlackRequest(Request):
    input: Path


@dataclass(frozen=True)
class DetectSilenceRequest(Request):
    input: Path


@dataclass(frozen=True)
class AnalyzeLoudnessRequest(Request):
    input: Path


@dataclass(frozen=True)
class DetectDuplicatesRequest(Request):
    input: Path


@dataclass(frozen=True)
class ExtractKeyframesRequest(Request):
    input: Path
    output_dir: Path


@dataclass(frozen=True)
class StatsRequest(Request):
    input: Path


@dataclass(frozen=True)
class ValidateRequest(Request):
    input: Path


@dataclass(frozen=True)
class ExtractMetadataRequest(Request):
    input: Path
    format: MetadataFormat = MetadataFormat.JSON


@dataclass(frozen=True)
class ExportEdlRequest(Request):
    input: Path


@dataclass(frozen=True)
class GenerateTestPatternRequest(Request):
    output: Path
    resolution: ResizeTarget = field(default_factory=lambda: ResizeTarget(1920, 1080, "1080p"))
    duration: Duration = field(default_factory=lambda: Duration(10.0))
