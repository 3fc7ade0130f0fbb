import json
import logging
import random

from fastapi import FastAPI, Request, HTTPException, BackgroundTasks
from fastapi.responses import JSONResponse

from wordsquare.metrics import LOG_FORMAT
from wordsquare.settings import settings

logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
logger = logging.getLogger("wordsquare")

# Populated at startup
_dictionary = None
# Length-restricted dictionaries, keyed by grid size
_reduced = {}


def set_dictionary(dictionary):
    global _dictionary
    _dictionary = dictionary
    _reduced.clear()


def _reduced_dictionary(grid_size: int):
    if grid_size not in _reduced:
        _reduced[grid_size] = _dictionary.restricted_to_length(grid_size)
        logger.info("Reduced dictionary for %dx%d holds %d words", grid_size, grid_size, len(_reduced[grid_size]))
    return _reduced[grid_size]


def create_app() -> FastAPI:
    from contextlib import asynccontextmanager

    @asynccontextmanager
    async def lifespan(application: FastAPI):
        from wordsquare.trie import load_dictionary

        if settings.DEBUG:
            logger.setLevel(logging.DEBUG)
        logger.info("Loading dictionary from %s", settings.DICTIONARY_PATH)
        set_dictionary(load_dictionary(str(settings.DICTIONARY_PATH)))
        if _dictionary:
            logger.info("Dictionary loaded (%d words)", len(_dictionary))
        else:
            logger.error("Dictionary at %s holds no usable words", settings.DICTIONARY_PATH)

        yield

    application = FastAPI(title="Word Square Solver", lifespan=lifespan)

    @application.get("/health")
    async def health():
        return {
            "status": "ok",
            "dictionary_loaded": bool(_dictionary),
            "word_count": len(_dictionary) if _dictionary is not None else 0,
        }

    @application.post("/solve")
    async def solve(request: Request, background_tasks: BackgroundTasks):
        from wordsquare.metrics import StageTimer
        from wordsquare.notifier import send_notification
        from wordsquare.solver import solve as solve_squares

        # An empty word list is a configuration error, not an unsolvable puzzle
        if not _dictionary:
            raise HTTPException(503, "Dictionary not loaded")

        raw = await request.body()
        try:
            body = json.loads(raw) if raw else {}
        except json.JSONDecodeError:
            raise HTTPException(400, "Request body is not valid JSON")
        if not isinstance(body, dict):
            raise HTTPException(400, "Request body must be a JSON object")

        grid_size = body.get("grid_size", settings.GRID_SIZE)
        if isinstance(grid_size, bool) or not isinstance(grid_size, int) or not 1 <= grid_size <= settings.MAX_GRID_SIZE:
            raise HTTPException(400, f"grid_size must be an integer from 1 to {settings.MAX_GRID_SIZE}")
        logger.info("POST /solve grid_size=%s", grid_size)

        timer = StageTimer()
        try:
            with timer.stage("reduce"):
                reduced = _reduced_dictionary(grid_size)
            with timer.stage("solve"):
                solutions = solve_squares(grid_size, reduced, settings.WORKERS)
        except ValueError as e:
            raise HTTPException(400, str(e))

        logger.info("Found %d solutions for %sx%s", len(solutions), grid_size, grid_size)

        if settings.NOTIFY:
            background_tasks.add_task(
                send_notification, solutions, grid_size, timer.summary(),
                settings.NTFY_TOPIC, settings.NTFY_URL,
            )

        return JSONResponse({
            "grid_size": grid_size,
            "solution_count": len(solutions),
            "solutions": [list(s) for s in solutions[:settings.MAX_RESULTS]],
            "random_solution": list(random.choice(solutions)) if solutions else None,
            "processing_time": timer.total_ms,
            "stage_timings": timer.summary(),
        })

    @application.get("/api/settings")
    async def api_get_settings():
        from wordsquare.settings import get_editable_settings, EDITABLE_FIELDS
        values = get_editable_settings(settings)
        field_types = {k: v.__name__ for k, v in EDITABLE_FIELDS.items()}
        return JSONResponse({"settings": values, "field_types": field_types})

    @application.post("/api/settings")
    async def api_post_settings(request: Request):
        from wordsquare.settings import update_settings, get_editable_settings
        try:
            body = await request.json()
        except json.JSONDecodeError:
            raise HTTPException(400, "Request body is not valid JSON")
        if not isinstance(body, dict):
            raise HTTPException(400, "Request body must be a JSON object")
        errors = update_settings(settings, **body)
        if errors:
            return JSONResponse({"updated": get_editable_settings(settings), "errors": errors}, status_code=400)
        logger.info("Settings updated: %s", body)
        return JSONResponse({"updated": get_editable_settings(settings)})

    return application


app = create_app()
