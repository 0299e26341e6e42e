"""
Video processing pipeline used by the job runner.

The worker does not transcode anything itself. SimulatedVideoPipeline stands
in for a real media pipeline: each stage is a fixed pause and the final
artifacts are placeholder URLs. A real pipeline can replace it as long as it
keeps the same three coroutines (process_stage, export, finalize).
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Protocol

from app.config import Settings
from app.schemas.events import ClipAsset, JobAssets, JobSummary

logger = logging.getLogger(__name__)

DEFAULT_ASPECT = "9:16"

STARTED_PROGRESS = 0.1
EXPORTING_PROGRESS = 0.95
COMPLETED_PROGRESS = 1.0


@dataclass(frozen=True)
class Stage:
    """One step of the processing sequence."""

    progress: float
    message: str


PROCESSING_STAGES: tuple[Stage, ...] = (
    Stage(0.2, "Downloading source video..."),
    Stage(0.4, "Analyzing video content..."),
    Stage(0.6, "Applying transformations..."),
    Stage(0.8, "Adding effects and audio..."),
    Stage(0.9, "Generating thumbnails..."),
)


@dataclass
class PipelineOutput:
    """What a finished pipeline hands back to the runner."""

    assets: JobAssets
    summary: JobSummary


class VideoPipeline(Protocol):
    """Interface the job runner drives."""

    stages: tuple[Stage, ...]

    async def process_stage(self, stage: Stage, parameters: dict[str, Any]) -> None: ...

    async def export(self, parameters: dict[str, Any]) -> None: ...

    async def finalize(
        self, parameters: dict[str, Any], started_at: float
    ) -> PipelineOutput: ...


def resolve_aspect(parameters: dict[str, Any]) -> str:
    """
    Read ``transform.layout.aspect`` from the job parameters.

    Any missing level, non-dict level or empty value falls back to 9:16.
    """
    transform = parameters.get("transform")
    if not isinstance(transform, dict):
        return DEFAULT_ASPECT
    layout = transform.get("layout")
    if not isinstance(layout, dict):
        return DEFAULT_ASPECT
    aspect = layout.get("aspect")
    if isinstance(aspect, str) and aspect:
        return aspect
    return DEFAULT_ASPECT


class SimulatedVideoPipeline:
    """Pipeline that waits a fixed time per stage and returns sample artifacts."""

    SAMPLE_MP4_URL = "https://sample-videos.com/zip/10/mp4/SampleVideo_1280x720_5mb.mp4"
    SAMPLE_HLS_URL = "https://sample-videos.com/zip/10/mp4/SampleVideo_1280x720_5mb.m3u8"
    SAMPLE_THUMBS = (
        "https://via.placeholder.com/1080x1920/4A90E2/FFFFFF?text=Cre8+Video+1",
        "https://via.placeholder.com/1080x1920/50C878/FFFFFF?text=Cre8+Video+2",
        "https://via.placeholder.com/1080x1920/FF6B6B/FFFFFF?text=Cre8+Video+3",
    )
    SAMPLE_SUBTITLES_URL = "https://example.com/subtitles.vtt"
    SAMPLE_CLIP_DURATION_SEC = 60
    SAMPLE_INPUT_DURATION_SEC = 120
    SAMPLE_FILESIZE_BYTES = 15728640

    def __init__(
        self,
        stage_delay_seconds: float = 2.0,
        export_delay_seconds: float = 3.0,
        finalize_delay_seconds: float = 2.0,
        stages: tuple[Stage, ...] = PROCESSING_STAGES,
    ):
        self.stage_delay = stage_delay_seconds
        self.export_delay = export_delay_seconds
        self.finalize_delay = finalize_delay_seconds
        self.stages = stages

    @classmethod
    def from_settings(cls, settings: Settings) -> "SimulatedVideoPipeline":
        return cls(
            stage_delay_seconds=settings.stage_delay_seconds,
            export_delay_seconds=settings.export_delay_seconds,
            finalize_delay_seconds=settings.finalize_delay_seconds,
        )

    async def process_stage(self, stage: Stage, parameters: dict[str, Any]) -> None:
        logger.debug(f"Simulating stage: {stage.message}")
        await asyncio.sleep(self.stage_delay)

    async def export(self, parameters: dict[str, Any]) -> None:
        await asyncio.sleep(self.export_delay)

    async def finalize(
        self, parameters: dict[str, Any], started_at: float
    ) -> PipelineOutput:
        """Build the sample result, honouring the requested aspect ratio."""
        await asyncio.sleep(self.finalize_delay)

        clip = ClipAsset(
            url_mp4=self.SAMPLE_MP4_URL,
            url_hls=self.SAMPLE_HLS_URL,
            thumbs=list(self.SAMPLE_THUMBS),
            subtitle_vtt=self.SAMPLE_SUBTITLES_URL,
            duration_sec=self.SAMPLE_CLIP_DURATION_SEC,
            aspect=resolve_aspect(parameters),
            filesize_bytes=self.SAMPLE_FILESIZE_BYTES,
        )
        assets = JobAssets(clips=[clip])

        summary = JobSummary(
            processing_time_sec=round(time.monotonic() - started_at),
            input_duration=self.SAMPLE_INPUT_DURATION_SEC,
            output_clips=len(assets.clips),
            total_filesize=sum(c.filesize_bytes for c in assets.clips),
        )

        return PipelineOutput(assets=assets, summary=summary)
