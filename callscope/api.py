"""
callscope/api.py
─────────────────────────────────────────────────────────────────────────────
CallScope — Dual-mode API layer

TWO USAGE MODES:
  1. Importable module:
         from callscope.api import CallScopeAPI
         api = CallScopeAPI()
         result = api.analyze(raw_text)

  2. FastAPI HTTP server (dashboard UI via fetch()):
         python -m callscope.api                   # default: port 8766
         python -m callscope.api --port 9000
         uvicorn callscope.api:app --port 8766

ENDPOINTS:
  POST /analyze  — parse raw log text → summary, top contacts, status split
  GET  /models   — locally available Ollama models
  GET  /config   — current callscope_config.json (merged with defaults)
  POST /config   — update config keys
  GET  /health   — liveness

CORS: localhost-only (127.0.0.1 / ::1). Not exposed to network by default.

STATE:
  Every /analyze call is a full parse/analyze cycle. Nothing from a
  previous request is kept.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import Body, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from callscope import __version__
from callscope.config import DEFAULT_CONFIG, load_config, save_config, validate_config_update
from callscope.insights import get_call_insights
from callscope.llm.base import InsightAdapter
from callscope.llm.ollama_adapter import OllamaAdapter
from callscope.parsers.log_parser import parse_raw_logs
from callscope.report import build_report, report_to_dict

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════
# IMPORTABLE CLASS
# ═══════════════════════════════════════════════════════════════════════════

class CallScopeAPI:
    """
    Pure-Python API wrapper around the parse → aggregate pipeline.
    No HTTP layer required — import and call directly.

    Usage:
        api = CallScopeAPI(config={"top_n": 3})
        result = api.analyze(raw_text, include_insights=True)
    """

    def __init__(
        self,
        config:  Optional[Dict[str, Any]] = None,
        adapter: Optional[InsightAdapter] = None,
    ):
        self.config  = {**DEFAULT_CONFIG, **(config or {})}
        self.adapter = adapter

    def _get_adapter(self) -> InsightAdapter:
        if self.adapter is None:
            self.adapter = OllamaAdapter(
                model       = self.config["model"],
                host        = self.config["ollama_host"],
                timeout_sec = int(self.config["timeout_sec"]),
            )
        return self.adapter

    def analyze(
        self,
        raw:              str,
        include_insights: Optional[bool] = None,
        top_n:            Optional[int]  = None,
    ) -> Dict[str, Any]:
        """
        Run a full analysis cycle on raw call-log text.

        Args:
            raw:              Raw call-log blob.
            include_insights: Ask the insight backend for a summary.
                              Defaults to config["insights_enabled"].
            top_n:            Size of the top contacts list.
                              Defaults to config["top_n"].

        Returns:
            report_to_dict() of the AnalysisReport.

        Raises:
            ValueError: if top_n is negative.
        """
        if include_insights is None:
            include_insights = bool(self.config["insights_enabled"])
        if top_n is None:
            top_n = int(self.config["top_n"])
        if top_n < 0:
            raise ValueError(f"top_n must be >= 0, got {top_n}")

        records = parse_raw_logs(raw)

        insight = None
        if include_insights:
            insight = get_call_insights(
                records,
                self._get_adapter(),
                limit=int(self.config["insight_limit"]),
            )

        report = build_report(records, top_n=top_n, insight=insight)
        logger.info(
            f"Analysis complete: {report.summary.total_dials} calls, "
            f"{report.summary.unique_numbers} numbers"
        )
        return report_to_dict(report)

    def list_models(self) -> list:
        adapter = self._get_adapter()
        if isinstance(adapter, OllamaAdapter):
            return adapter.list_available_models()
        return []


# ═══════════════════════════════════════════════════════════════════════════
# FASTAPI APP
# ═══════════════════════════════════════════════════════════════════════════

class AnalyzeRequest(BaseModel):
    raw:              str            = ""
    include_insights: Optional[bool] = None   # uses config if empty
    top_n:            Optional[int]  = Field(default=None, ge=0, le=100)


def _build_app(project_root: Optional[Path] = None) -> FastAPI:
    """
    Build and return the FastAPI application instance.
    Config is read from project_root on each request.
    """
    _app = FastAPI(
        title       = "CallScope API",
        description = "Call log parsing and analytics — local API for the dashboard",
        version     = __version__,
        docs_url    = "/docs",
        redoc_url   = None,
    )

    _app.add_middleware(
        CORSMiddleware,
        allow_origins     = [
            "http://localhost",
            "http://localhost:8766",
            "http://127.0.0.1",
            "http://127.0.0.1:8766",
            "null",   # file:// origin
        ],
        allow_methods     = ["GET", "POST", "OPTIONS"],
        allow_headers     = ["Content-Type"],
        allow_credentials = False,
    )

    # ── ENDPOINTS ───────────────────────────────────────────────────────

    @_app.post("/analyze", summary="Parse and analyze raw call logs")
    def analyze(req: AnalyzeRequest):
        """
        Parse the raw blob and return summary stats, top contacts,
        the connected/missed split and (optionally) an AI insight.

        Malformed records are dropped, never rejected.
        """
        try:
            api = CallScopeAPI(config=load_config(project_root))
            return api.analyze(
                req.raw,
                include_insights = req.include_insights,
                top_n            = req.top_n,
            )
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc))
        except Exception as exc:
            logger.error(f"Analyze endpoint error: {exc}", exc_info=True)
            raise HTTPException(status_code=500, detail=f"Analysis failed: {exc}")

    @_app.get("/models", summary="List local Ollama models")
    def get_models():
        api = CallScopeAPI(config=load_config(project_root))
        models = api.list_models()
        return {"count": len(models), "models": models}

    @_app.get("/config", summary="Get config")
    def get_config():
        try:
            return load_config(project_root)
        except Exception as exc:
            raise HTTPException(status_code=500, detail=str(exc))

    @_app.post("/config", summary="Update config")
    def save_config_endpoint(update: Dict[str, Any] = Body(default_factory=dict)):
        """
        Merge known keys into the stored config. Unknown keys are ignored.
        A value of the wrong type or range rejects the whole update (400).
        """
        try:
            changes = validate_config_update(update)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc))
        try:
            cfg = {**load_config(project_root), **changes}
            save_config(cfg, project_root)
            return cfg
        except Exception as exc:
            raise HTTPException(status_code=500, detail=str(exc))

    @_app.get("/health", summary="Health check")
    def health():
        return {"status": "ok", "version": __version__}

    return _app


# Module-level app instance, used by uvicorn callscope.api:app
app = _build_app()


# ═══════════════════════════════════════════════════════════════════════════
# CLI ENTRYPOINT: python -m callscope.api
# ═══════════════════════════════════════════════════════════════════════════

if __name__ == "__main__":
    import argparse

    import uvicorn

    parser = argparse.ArgumentParser(
        prog        = "callscope.api",
        description = "CallScope API Server — serves the dashboard on localhost",
    )
    parser.add_argument("--port", type=int, default=8766,
                        help="Port to bind (default: 8766)")
    parser.add_argument("--host", type=str, default="127.0.0.1",
                        help="Host to bind — DO NOT change to 0.0.0.0 on shared networks")
    parser.add_argument("--root", type=Path, default=None,
                        help="Directory holding callscope_config.json (default: cwd)")
    args = parser.parse_args()

    server_app = _build_app(project_root=args.root)

    print(f"""
+--------------------------------------------------+
|   CallScope API Server v{__version__}
+--------------------------------------------------+
|  Local:    http://{args.host}:{args.port}
|  Docs:     http://{args.host}:{args.port}/docs
|  Health:   http://{args.host}:{args.port}/health
+--------------------------------------------------+
""")

    uvicorn.run(
        server_app,
        host      = args.host,
        port      = args.port,
        log_level = "info",
    )
