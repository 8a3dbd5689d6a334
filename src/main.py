"""Deinflection FastAPI application - Japanese base-form recovery API."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

import settings
from models import (
    DeinflectRequest,
    DeinflectTextRequest,
    DeinflectResponse,
    DeinflectTextResponse,
    RulesResponse,
)
from services.analysis import (
    deinflect_text,
    deinflect_word,
    describe_rules,
    get_catalog,
)

VERSION = "0.1.0"


# ============================================================================
# Application Lifespan
# ============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the rule catalog on startup so a bad catalog fails fast."""
    _ = get_catalog()
    yield


# ============================================================================
# FastAPI Application
# ============================================================================


app = FastAPI(
    title="Deinflect API",
    description="""Japanese deinflection API for dictionary lookup.

## Features
- **Deinflection**: Recover base forms from conjugated verbs and adjectives
- **Reason chains**: Every candidate explains which inflections were undone
- **Prefix scan**: Deinflect every prefix of running text in one call
- **Kana folding**: Half-width and katakana input is matched as hiragana

## Endpoints
- `/deinflect` - All candidate base forms of one word
- `/deinflect_text` - Candidates for each prefix of a text
- `/rules` - Reason labels of the active rule catalog
""",
    version=VERSION,
    lifespan=lifespan,
)


# ============================================================================
# Middleware
# ============================================================================


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================================
# Health Endpoints
# ============================================================================


@app.get("/", tags=["Health"])
async def root() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok", "service": "deinflect", "version": VERSION}


@app.get("/health", tags=["Health"])
async def health() -> dict[str, str | int]:
    """Detailed health check."""
    return {"status": "healthy", "version": VERSION, "rules": len(get_catalog())}


# ============================================================================
# Deinflection Endpoints
# ============================================================================


@app.post("/deinflect", response_model=DeinflectResponse, tags=["Deinflection"])
async def deinflect_endpoint(request: DeinflectRequest) -> DeinflectResponse:
    """
    List every base form a conjugated word can come from.

    For 聞かれました the candidates include 聞かれる (polite past) and
    聞く (polite past, passive). Implausible forms are kept; filtering
    them against a dictionary is up to the caller.
    """
    try:
        return deinflect_word(request.word, normalize=request.normalize)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Deinflection failed: {e!s}") from e


@app.post("/deinflect_text", response_model=DeinflectTextResponse, tags=["Deinflection"])
async def deinflect_text_endpoint(request: DeinflectTextRequest) -> DeinflectTextResponse:
    """
    Deinflect every prefix of a text, longest first.

    Use when the word boundary is unknown, e.g. for the text under the
    cursor in a reader.
    """
    try:
        return deinflect_text(request.text, normalize=request.normalize)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Deinflection failed: {e!s}") from e


@app.get("/rules", response_model=RulesResponse, tags=["Rules"])
async def rules_endpoint() -> RulesResponse:
    """Reason labels of the active catalog with their rule counts."""
    try:
        return describe_rules()
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Could not load rules: {e!s}") from e


# ============================================================================
# CLI Entry Point
# ============================================================================


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL,
    )
