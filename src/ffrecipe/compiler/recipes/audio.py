"""Audio recipes.

Most of these keep the video stream (copied when the containers allow it)
and re-encode audio to AAC through a single ``-af`` chain.
"""

from __future__ import annotations

from ffrecipe.compiler.codecs import resolve_video_codec
from ffrecipe.compiler.graph import FilterGraph, simple_chain
from ffrecipe.compiler.invocation import CompiledPlan
from ffrecipe.compiler.recipes._common import audio_filter_encode, single
from ffrecipe.compiler.registry import RecipeContext, recipe
from ffrecipe.compiler.requests import (
    AdjustVolumeRequest,
    AudioDuckingRequest,
    AudioSpeedRequest,
    EchoRemovalRequest,
    EqualizerRequest,
    ExtractAudioRequest,
    FadeRequest,
    MixAudioRequest,
    NoiseReductionRequest,
    NormalizeRequest,
    SyncAudioRequest,
    VisualizeRequest,
    VoiceIsolationRequest,
)
from ffrecipe.compiler.tempo import atempo_chain_keep_pitch
from ffrecipe.exceptions import PreconditionError
from ffrecipe.values import AudioFormat, AudioSyncDirection, VisualizationStyle
from ffrecipe.values._common import format_number

# Broadcast loudness target
LOUDNORM = "loudnorm=I=-16:TP=-1.5:LRA=11"

EQ_GAIN_LIMIT = 20.0

# Band -> (centre frequency, width) in Hz
_EQ_BANDS = {
    "bass": (100, 100),
    "mid": (1000, 2000),
    "treble": (10000, 5000),
}

_VISUALIZERS = {
    VisualizationStyle.WAVEFORM: "showwaves=s=1280x720:mode=line:colors=0xFFFFFF:scale=lin",
    VisualizationStyle.SPECTRUM: "showspectrum=s=1280x720:color=intensity:slide=scroll",
}


@recipe(ExtractAudioRequest)
def extract_audio(request: ExtractAudioRequest, ctx: RecipeContext) -> CompiledPlan:
    """Extract the audio track, whole or between ``start`` and ``end``.

    The output extension is replaced with the format's container extension.
    """
    audio_format = request.format
    output = request.output.with_suffix(f".{audio_format.value}")

    if (request.start is None) != (request.end is None):
        raise PreconditionError("An audio range needs both a start and an end")

    if request.start is not None and request.end is not None:
        length = request.end.to_seconds() - request.start.to_seconds()
        if length <= 0:
            raise PreconditionError(
                f"Range end {request.end} must be after start {request.start}"
            )
        cmd = [
            ctx.flag,
            "-ss",
            request.start.to_ffmpeg(),
            "-i",
            str(request.input),
            "-t",
            format_number(float(length)),
            "-vn",
            *audio_format.codec_args(),
            str(output),
        ]
        return single(cmd, output, f"extract audio {request.start}-{request.end}")

    cmd = [ctx.flag, "-i", str(request.input), "-vn", *audio_format.codec_args(), str(output)]
    return single(cmd, output, "extract audio")


@recipe(AdjustVolumeRequest)
def adjust_volume(request: AdjustVolumeRequest, ctx: RecipeContext) -> CompiledPlan:
    return audio_filter_encode(
        ctx.flag,
        request.input,
        request.output,
        request.adjustment.to_ffmpeg(),
        resolve_video_codec(request.input, request.output),
        f"volume {request.adjustment}",
    )


@recipe(NormalizeRequest)
def normalize(request: NormalizeRequest, ctx: RecipeContext) -> CompiledPlan:
    return audio_filter_encode(
        ctx.flag,
        request.input,
        request.output,
        LOUDNORM,
        resolve_video_codec(request.input, request.output),
        "normalize loudness",
    )


@recipe(SyncAudioRequest)
def sync_audio(request: SyncAudioRequest, ctx: RecipeContext) -> CompiledPlan:
    """Shift audio relative to video.

    Delay pads the audio with silence; advance offsets the whole input's
    timestamps with ``-itsoffset``.
    """
    seconds = request.offset.seconds
    cmd = [ctx.flag]
    if request.direction is AudioSyncDirection.DELAY:
        delay_ms = int(seconds * 1000)
        audio_filter = f"adelay={delay_ms}|{delay_ms}"
    else:
        cmd += ["-itsoffset", format_number(seconds)]
        audio_filter = "anull"

    cmd += [
        "-i",
        str(request.input),
        "-af",
        audio_filter,
        "-c:v",
        resolve_video_codec(request.input, request.output),
        "-c:a",
        "aac",
        str(request.output),
    ]
    return single(cmd, request.output, f"{request.direction.value} audio {request.offset}")


@recipe(MixAudioRequest)
def mix_audio(request: MixAudioRequest, ctx: RecipeContext) -> CompiledPlan:
    graph = FilterGraph().chain(
        "amix=inputs=2:duration=longest", inputs=["0:a", "1:a"], outputs=["a"]
    )
    cmd = [
        ctx.flag,
        "-i",
        str(request.first),
        "-i",
        str(request.second),
        "-filter_complex",
        graph.render(mapped=["a"]),
        "-map",
        "[a]",
        *AudioFormat.from_extension(request.output.suffix).codec_args(),
        str(request.output),
    ]
    return single(cmd, request.output, "mix audio")


@recipe(FadeRequest)
def fade(request: FadeRequest, ctx: RecipeContext) -> CompiledPlan:
    """Fade audio in from the start and/or out at the end.

    A fade-out probes the input duration to place its start.
    """
    filters = []
    if request.fade_in is not None:
        filters.append(f"afade=t=in:st=0:d={format_number(request.fade_in.seconds)}")

    if request.fade_out is not None:
        fade_out = request.fade_out.seconds
        duration = ctx.probe.duration_seconds(request.input)
        start = max(duration - fade_out, 0.0)
        if start > 0.0:
            filters.append(
                f"afade=t=out:st={format_number(start)}:d={format_number(fade_out)}"
            )
        else:
            filters.append(f"afade=t=out:st=0:d={format_number(min(duration, fade_out))}")

    if not filters:
        raise PreconditionError("At least one fade (in or out) must be specified")

    return audio_filter_encode(
        ctx.flag,
        request.input,
        request.output,
        simple_chain(*filters),
        resolve_video_codec(request.input, request.output),
        "fade audio",
    )


@recipe(NoiseReductionRequest)
def noise_reduction(request: NoiseReductionRequest, ctx: RecipeContext) -> CompiledPlan:
    return audio_filter_encode(
        ctx.flag,
        request.input,
        request.output,
        simple_chain("highpass=f=200", "lowpass=f=3000", "anlmdn=s=0.0003"),
        resolve_video_codec(request.input, request.output),
        "reduce noise",
    )


@recipe(EchoRemovalRequest)
def echo_removal(request: EchoRemovalRequest, ctx: RecipeContext) -> CompiledPlan:
    return audio_filter_encode(
        ctx.flag,
        request.input,
        request.output,
        "aecho=0.8:0.88:60:0.4",
        resolve_video_codec(request.input, request.output),
        "remove echo",
    )


@recipe(AudioDuckingRequest)
def audio_ducking(request: AudioDuckingRequest, ctx: RecipeContext) -> CompiledPlan:
    return audio_filter_encode(
        ctx.flag,
        request.input,
        request.output,
        "acompressor=threshold=0.05:ratio=9:attack=5:release=50",
        resolve_video_codec(request.input, request.output),
        "duck audio",
    )


def _eq_gain(value: int) -> str:
    gain = max(-EQ_GAIN_LIMIT, min(value / 20.0, EQ_GAIN_LIMIT))
    return format_number(gain)


@recipe(EqualizerRequest)
def equalizer(request: EqualizerRequest, ctx: RecipeContext) -> CompiledPlan:
    filters = []
    for band, value in (("bass", request.bass), ("mid", request.mid), ("treble", request.treble)):
        if value is None:
            continue
        freq, width = _EQ_BANDS[band]
        filters.append(f"equalizer=f={freq}:width_type=h:width={width}:g={_eq_gain(value)}")
    return audio_filter_encode(
        ctx.flag,
        request.input,
        request.output,
        ",".join(filters) or "anull",
        resolve_video_codec(request.input, request.output),
        "equalize",
    )


@recipe(VoiceIsolationRequest)
def voice_isolation(request: VoiceIsolationRequest, ctx: RecipeContext) -> CompiledPlan:
    return audio_filter_encode(
        ctx.flag,
        request.input,
        request.output,
        "highpass=f=300,lowpass=f=3400",
        resolve_video_codec(request.input, request.output),
        "isolate voice",
    )


@recipe(AudioSpeedRequest)
def audio_speed(request: AudioSpeedRequest, ctx: RecipeContext) -> CompiledPlan:
    return audio_filter_encode(
        ctx.flag,
        request.input,
        request.output,
        atempo_chain_keep_pitch(request.factor.factor),
        resolve_video_codec(request.input, request.output),
        f"audio tempo {request.factor}",
    )


@recipe(VisualizeRequest)
def visualize(request: VisualizeRequest, ctx: RecipeContext) -> CompiledPlan:
    graph = FilterGraph().chain(_VISUALIZERS[request.style], inputs=["0:a"], outputs=["v"])
    cmd = [
        ctx.flag,
        "-i",
        str(request.audio),
        "-filter_complex",
        graph.render(mapped=["v"]),
        "-map",
        "[v]",
        "-c:v",
        "libx264",
        "-pix_fmt",
        "yuv420p",
        "-r",
        "30",
        str(request.output),
    ]
    return single(cmd, request.output, f"visualize {request.style.value}")
