"""
Leonardo.ai image generation.

Two-step job protocol: POST /generations returns a generation id, then
GET /generations/{id} is polled until the job is COMPLETE or FAILED.
Every job is tracked as an ImageJobResult moving through
SUBMITTED -> POLLING -> COMPLETE | FAILED | TIMED_OUT | CANCELLED.
"""
import asyncio
from typing import Any, Dict, List, Optional

from agents.config import (
    IMAGE_INTER_REQUEST_DELAY_SECONDS,
    IMAGE_POLL_INTERVAL_SECONDS,
    IMAGE_POLL_MAX_ATTEMPTS,
    LEONARDO_API_URL,
    LEONARDO_GUIDANCE_SCALE,
    LEONARDO_IMAGE_HEIGHT,
    LEONARDO_IMAGE_WIDTH,
    LEONARDO_INFERENCE_STEPS,
    LEONARDO_MODEL_ID,
)
from agents.core.interfaces import IImageProvider
from agents.domain.models import ImageJobResult, ImageJobState
from setup_logging_optimized import get_logger
from utils.http_session import session_scope

logger = get_logger(__name__)

BACKGROUND_NEGATIVE_PROMPT = "text, words, letters, people, faces, cluttered, busy"
ILLUSTRATION_NEGATIVE_PROMPT = "photo, realistic, complex, detailed background, text"
ILLUSTRATION_STYLES = {
    "flat": "flat design, vector art, simple",
    "3d": "3D render, modern, glossy",
    "isometric": "isometric view, clean lines",
    "minimal": "minimalist, simple shapes, clean",
}


class LeonardoImageService(IImageProvider):
    """Best-effort Leonardo.ai client. generate_image() never raises for provider failures."""

    name = "leonardo"

    def __init__(
        self,
        api_key: Optional[str] = None,
        session: Optional[Any] = None,
        poll_interval: float = IMAGE_POLL_INTERVAL_SECONDS,
        max_attempts: int = IMAGE_POLL_MAX_ATTEMPTS,
        inter_request_delay: float = IMAGE_INTER_REQUEST_DELAY_SECONDS,
        request_timeout: float = 30.0,
    ):
        self.api_key = api_key
        self._session = session
        self.poll_interval = poll_interval
        self.max_attempts = max_attempts
        self.inter_request_delay = inter_request_delay
        self.request_timeout = request_timeout
        # Every job this instance started, in submission order
        self.jobs: List[ImageJobResult] = []

    @property
    def is_available(self) -> bool:
        return bool(self.api_key)

    @property
    def headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    def build_payload(
        self,
        prompt: str,
        width: int = LEONARDO_IMAGE_WIDTH,
        height: int = LEONARDO_IMAGE_HEIGHT,
        negative_prompt: Optional[str] = None,
        preset_style: Optional[str] = None,
        model_id: str = LEONARDO_MODEL_ID,
    ) -> Dict[str, Any]:
        payload = {
            "prompt": prompt,
            "modelId": model_id,
            "width": width,
            "height": height,
            "num_images": 1,
            "guidance_scale": LEONARDO_GUIDANCE_SCALE,
            "num_inference_steps": LEONARDO_INFERENCE_STEPS,
        }
        if negative_prompt:
            payload["negative_prompt"] = negative_prompt
        if preset_style:
            payload["presetStyle"] = preset_style
        return payload

    async def generate_image(self, prompt: str, **options) -> ImageJobResult:
        if not self.is_available:
            return ImageJobResult.skipped("Leonardo API key not configured")
        if not prompt or not prompt.strip():
            return ImageJobResult.skipped("Empty prompt")

        async with session_scope(self._session, self.request_timeout) as session:
            return await self._run_job(session, prompt, **options)

    async def generate_images(self, prompts: List[str], **options) -> List[ImageJobResult]:
        """Sequential, one result per prompt, with a pause between submissions."""
        results: List[ImageJobResult] = []
        if not self.is_available:
            logger.warning(f"[LEONARDO] API key not configured, skipping {len(prompts)} image(s)")
            return [ImageJobResult.skipped("Leonardo API key not configured") for _ in prompts]

        async with session_scope(self._session, self.request_timeout) as session:
            for i, prompt in enumerate(prompts):
                if i > 0 and self.inter_request_delay > 0:
                    await asyncio.sleep(self.inter_request_delay)
                if not prompt or not prompt.strip():
                    results.append(ImageJobResult.skipped("Empty prompt"))
                    continue
                results.append(await self._run_job(session, prompt, **options))

        done = sum(1 for r in results if r.succeeded)
        logger.info(f"[LEONARDO] Generated {done}/{len(prompts)} image(s)")
        return results

    async def _run_job(self, session: Any, prompt: str, **options) -> ImageJobResult:
        logger.info(f"[LEONARDO] Submitting: {prompt[:100]}{'...' if len(prompt) > 100 else ''}")
        try:
            generation_id = await self.submit(session, self.build_payload(prompt, **options))
        except Exception as e:
            logger.warning(f"[LEONARDO] Submission failed: {e}")
            job = ImageJobResult.failed(f"Submission failed: {e}")
            self.jobs.append(job)
            return job

        job = ImageJobResult(state=ImageJobState.SUBMITTED, job_id=generation_id)
        self.jobs.append(job)
        return await self.poll(session, job)

    async def submit(self, session: Any, payload: Dict[str, Any]) -> str:
        """POST the generation request and return the generation id. Raises on failure."""
        async with session.post(f"{LEONARDO_API_URL}/generations", headers=self.headers, json=payload) as resp:
            if resp.status != 200:
                body = await resp.text()
                raise RuntimeError(f"HTTP {resp.status}: {body[:200]}")
            data = await resp.json()

        generation_id = ((data or {}).get("sdGenerationJob") or {}).get("generationId")
        if not generation_id:
            raise RuntimeError("No generation ID returned")
        logger.info(f"[LEONARDO] Generation started, id={generation_id}")
        return generation_id

    async def poll(self, session: Any, job: ImageJobResult) -> ImageJobResult:
        """Poll until a terminal state or the attempt ceiling. Updates `job` in place."""
        job.state = ImageJobState.POLLING
        try:
            while job.attempts < self.max_attempts:
                await asyncio.sleep(self.poll_interval)
                job.attempts += 1

                try:
                    generation = await self._fetch_status(session, job.job_id)
                except Exception as e:
                    # A failed status check is not a failed job; keep polling
                    logger.debug(f"[LEONARDO] Status check {job.attempts} for {job.job_id} failed: {e}")
                    continue

                status = (generation.get("status") or "").upper()
                if status == "COMPLETE":
                    images = generation.get("generated_images") or []
                    if images and images[0].get("url"):
                        job.state = ImageJobState.COMPLETE
                        job.url = images[0]["url"]
                        job.id = images[0].get("id")
                        logger.info(f"[LEONARDO] {job.job_id} complete after {job.attempts} poll(s)")
                    else:
                        job.state = ImageJobState.FAILED
                        job.error = "No images generated"
                        logger.warning(f"[LEONARDO] {job.job_id} completed without images")
                    return job
                if status == "FAILED":
                    job.state = ImageJobState.FAILED
                    job.error = "Image generation failed"
                    logger.warning(f"[LEONARDO] {job.job_id} failed")
                    return job
        except asyncio.CancelledError:
            job.state = ImageJobState.CANCELLED
            job.error = "Polling cancelled"
            logger.info(f"[LEONARDO] Polling cancelled for {job.job_id} after {job.attempts} poll(s)")
            raise

        job.state = ImageJobState.TIMED_OUT
        job.error = f"Timed out after {job.attempts} poll(s)"
        logger.warning(f"[LEONARDO] {job.job_id} timed out after {job.attempts} poll(s)")
        return job

    async def _fetch_status(self, session: Any, generation_id: str) -> Dict[str, Any]:
        async with session.get(f"{LEONARDO_API_URL}/generations/{generation_id}", headers=self.headers) as resp:
            if resp.status != 200:
                raise RuntimeError(f"HTTP {resp.status}")
            data = await resp.json()
        return (data or {}).get("generations_by_pk") or {}

    async def generate_slide_background(self, description: str, brand_colors: Optional[List[str]] = None) -> ImageJobResult:
        color_prompt = f"using brand colors: {', '.join(brand_colors)}, " if brand_colors else ""
        prompt = (
            f"professional pitch deck slide background, {description}, {color_prompt}"
            "modern, clean, corporate, high quality, minimalist design"
        )
        return await self.generate_image(
            prompt,
            width=1920,
            height=1080,
            negative_prompt=BACKGROUND_NEGATIVE_PROMPT,
            preset_style="CINEMATIC",
        )

    async def generate_illustration(self, concept: str, style: str = "flat") -> ImageJobResult:
        style_prompt = ILLUSTRATION_STYLES.get(style, ILLUSTRATION_STYLES["flat"])
        prompt = f"{concept}, {style_prompt}, professional, high quality, centered, white background"
        return await self.generate_image(
            prompt,
            width=1024,
            height=1024,
            negative_prompt=ILLUSTRATION_NEGATIVE_PROMPT,
        )
