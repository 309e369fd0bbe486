import logging

from fastapi import FastAPI, File, Request, UploadFile, HTTPException
from fastapi.responses import JSONResponse
from fastapi.concurrency import run_in_threadpool

from honeycomb.settings import settings

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
logger = logging.getLogger("honeycomb")

# Populated at startup. The search never mutates the trie, so one instance
# serves every request.
_trie = None


def create_app() -> FastAPI:
    from contextlib import asynccontextmanager

    @asynccontextmanager
    async def lifespan(application: FastAPI):
        global _trie

        from honeycomb.trie import load_trie
        logger.info("Loading dictionary from %s", settings.DICTIONARY_PATH)
        _trie = load_trie(str(settings.DICTIONARY_PATH), settings.MIN_WORD_LENGTH, settings.MAX_WORD_LENGTH)
        logger.info("Trie loaded")

        yield

        _trie = None

    application = FastAPI(title="Honeycomb Solver", lifespan=lifespan)

    @application.get("/health")
    async def health():
        return {
            "status": "ok",
            "trie_loaded": _trie is not None,
            "word_count": len(_trie) if _trie is not None else 0,
        }

    @application.post("/solve")
    async def solve(request: Request, file: UploadFile = File(None)):
        from honeycomb.errors import MalformedInput
        from honeycomb.grid import Honeycomb, parse_honeycomb
        from honeycomb.metrics import StageTimer
        from honeycomb.solver import find_all_words

        if _trie is None:
            raise HTTPException(503, "Dictionary not loaded")

        content_type = request.headers.get("content-type", "")
        logger.info("POST /solve content-type=%s", content_type)

        if file is not None and file.filename:
            logger.info("Received file: name=%s, type=%s", file.filename, file.content_type)
            if file.content_type and not file.content_type.startswith("text/"):
                raise HTTPException(400, f"Only text files accepted, got: {file.content_type}")
            data = await file.read()
        else:
            # Fallback: the honeycomb may be posted as the raw body
            data = await request.body()
            logger.info("No 'file' field, reading raw body (%d bytes)", len(data))

        if not data:
            raise HTTPException(400, "Empty request body: no honeycomb received")
        if len(data) > settings.MAX_UPLOAD_BYTES:
            raise HTTPException(413, f"File too large (max {settings.MAX_UPLOAD_BYTES} bytes)")

        timer = StageTimer()

        with timer.stage("parse"):
            try:
                layer_count, symbols = parse_honeycomb(data.decode("utf-8"))
                if layer_count > settings.MAX_LAYERS:
                    raise MalformedInput(f"{layer_count} layers exceeds the limit of {settings.MAX_LAYERS}")
                grid = Honeycomb.build(layer_count, symbols)
            except UnicodeDecodeError:
                raise HTTPException(400, "Honeycomb must be UTF-8 text")
            except MalformedInput as e:
                raise HTTPException(400, str(e))

        logger.info("Honeycomb %d layers: %s", grid.layer_count, " / ".join(grid.columns))

        # Each request owns its grid and the trie is read-only, so the search
        # can leave the event loop.
        with timer.stage("search"):
            store = await run_in_threadpool(find_all_words, grid, _trie)
        timer.count("cells", len(grid))
        timer.count("words", len(store))

        with timer.stage("sort"):
            all_words = sorted(store.words)

        words = all_words[:settings.MAX_RESULTS] if settings.MAX_RESULTS > 0 else all_words
        logger.info("Found %d words (returning %d)", len(all_words), len(words))

        result = {
            "layer_count": grid.layer_count,
            "columns": grid.columns,
            "words": words,
            "word_count": len(words),
            "paths": {w: store.paths[w] for w in words},
            "processing_time": timer.total_ms,
            "stage_timings": timer.summary(),
            "stats": dict(timer.counts),
        }
        if settings.DEBUG:
            _save_debug_artifacts(result)

        return JSONResponse(result)

    @application.get("/api/settings")
    async def api_get_settings():
        from honeycomb.settings import get_editable_settings, EDITABLE_FIELDS
        values = get_editable_settings(settings)
        field_types = {k: v.__name__ for k, v in EDITABLE_FIELDS.items()}
        return JSONResponse({"settings": values, "field_types": field_types})

    @application.post("/api/settings")
    async def api_post_settings(request: Request):
        from honeycomb.settings import update_settings, get_editable_settings
        body = await request.json()
        errors = update_settings(settings, **body)
        if errors:
            return JSONResponse({"updated": get_editable_settings(settings), "errors": errors}, status_code=400)
        logger.info("Settings updated: %s", body)
        return JSONResponse({"updated": get_editable_settings(settings)})

    return application


def _save_debug_artifacts(result: dict):
    import json
    from datetime import datetime

    debug_dir = settings.BASE_DIR / "debug"
    debug_dir.mkdir(exist_ok=True)
    ts = datetime.now().strftime("%Y%m%d_%H%M%S_%f")

    with open(debug_dir / f"{ts}_result.json", "w") as f:
        json.dump({"timestamp": ts, **result}, f, indent=2)

    logger.info("Saved debug artifacts to debug/%s_*", ts)


app = create_app()


def main():
    import uvicorn
    uvicorn.run("honeycomb.server:app", host="0.0.0.0", port=settings.PORT)
