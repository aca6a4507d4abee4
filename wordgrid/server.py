import logging
import random

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from wordgrid.settings import settings

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
logger = logging.getLogger("wordgrid")


class GenerateRequest(BaseModel):
    letters: str
    shuffle: bool | None = None
    seed: int | None = None


def _validate_letters(letters: str) -> str:
    letters = letters.strip().upper()
    if not letters:
        raise HTTPException(400, "No letters supplied")
    if not letters.isalpha():
        raise HTTPException(400, f"Letters must be alphabetic, got: {letters}")
    if len(letters) > settings.MAX_LETTERS:
        raise HTTPException(400, f"Too many letters (max {settings.MAX_LETTERS})")
    return letters


def create_app() -> FastAPI:
    from contextlib import asynccontextmanager

    @asynccontextmanager
    async def lifespan(application: FastAPI):
        from wordgrid.generator import CrosswordGenerator

        logger.info("Loading dictionary from %s (min_length=%d)", settings.DICTIONARY_PATH, settings.MIN_WORD_LENGTH)
        rng = random.Random(settings.RANDOM_SEED) if settings.RANDOM_SEED >= 0 else random.Random()
        application.state.generator = CrosswordGenerator.from_file(
            str(settings.DICTIONARY_PATH),
            settings.MIN_WORD_LENGTH,
            rng=rng,
            size_factor=settings.GRID_SIZE_FACTOR,
            max_words=settings.MAX_WORDS,
        )
        logger.info("Trie loaded")

        yield

        application.state.generator = None

    application = FastAPI(title="Word Grid Generator", lifespan=lifespan)

    @application.get("/health")
    async def health(request: Request):
        generator = getattr(request.app.state, "generator", None)
        return {
            "status": "ok",
            "trie_loaded": generator is not None,
            "word_count": len(generator.trie) if generator is not None else 0,
        }

    @application.get("/words")
    async def words(request: Request, letters: str, shuffle: bool = False):
        letters = _validate_letters(letters)
        generator = request.app.state.generator
        found = generator.trie.make_words(letters, shuffle=shuffle, rng=generator.rng)
        logger.info("Letters %s make %d words", letters, len(found))
        return JSONResponse({"letters": letters, "words": found, "word_count": len(found)})

    @application.post("/generate")
    async def generate(request: Request, body: GenerateRequest):
        from wordgrid.generator import CrosswordGenerator
        from wordgrid.metrics import StageTimer

        letters = _validate_letters(body.letters)
        shuffle = settings.SHUFFLE_CANDIDATES if body.shuffle is None else body.shuffle

        generator = request.app.state.generator
        # Runtime-editable settings apply per request; a seed gets its own generator
        generator = CrosswordGenerator(
            generator.trie,
            rng=random.Random(body.seed) if body.seed is not None else generator.rng,
            size_factor=settings.GRID_SIZE_FACTOR,
            max_words=settings.MAX_WORDS,
        )

        timer = StageTimer()
        result = generator.generate(letters, shuffle, timer=timer)
        grid = result.grid

        logger.info("Grid %dx%d for %s: placed %d/%d words",
                    grid.width, grid.height, letters, result.placed_count, result.requested_count)

        if settings.DEBUG:
            _save_debug_artifacts(result, timer)

        return JSONResponse({
            **result.to_dict(),
            "clue_numbers": [
                {"cell": [x, y], "number": n} for (x, y), n in grid.clue_numbers().items()
            ],
            "processing_time": timer.total_ms,
            "stage_timings": timer.summary(),
        })

    @application.get("/api/settings")
    async def api_get_settings():
        from wordgrid.settings import get_editable_settings, EDITABLE_FIELDS
        values = get_editable_settings(settings)
        field_types = {k: v.__name__ for k, v in EDITABLE_FIELDS.items()}
        return JSONResponse({"settings": values, "field_types": field_types})

    @application.post("/api/settings")
    async def api_post_settings(request: Request):
        from wordgrid.settings import update_settings, get_editable_settings
        body = await request.json()
        errors = update_settings(settings, **body)
        if errors:
            return JSONResponse({"updated": get_editable_settings(settings), "errors": errors}, status_code=400)
        logger.info("Settings updated: %s", body)
        return JSONResponse({"updated": get_editable_settings(settings)})

    return application


def _save_debug_artifacts(result, timer):
    import json
    from datetime import datetime

    debug_dir = settings.DEBUG_DIR
    debug_dir.mkdir(parents=True, exist_ok=True)
    ts = datetime.now().strftime("%Y%m%d_%H%M%S_%f")

    (debug_dir / f"{ts}_grid.txt").write_text(result.key + "\n", encoding="utf-8")

    payload = {
        "timestamp": ts,
        **result.to_dict(),
        "timings": timer.summary(),
        "total_ms": timer.total_ms,
    }
    with open(debug_dir / f"{ts}_result.json", "w") as f:
        json.dump(payload, f, indent=2)

    logger.info("Saved debug artifacts to %s/%s_*", debug_dir, ts)


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)
