from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import List, Optional

from fastapi import FastAPI, File, Form, HTTPException, UploadFile

from xmlview import __version__
from xmlview.api.middleware import AccessLogMiddleware, RequestIdMiddleware
from xmlview.api.models import ConvertOut, HealthOut, PoliciesOut
from xmlview.core.casts import CASTS
from xmlview.core.errors import CoercionFailure, InvalidPolicy, KeyNotFound, XMLParseError
from xmlview.core.operations import (
    apply_field_operations,
    parse_field_operations,
    split_specs,
)
from xmlview.core.parser import ParserLimits, from_string
from xmlview.core.parser.limits import env_int
from xmlview.core.transformers import OPTIMIZE_MODES, TRANSFORMERS

log = logging.getLogger("xmlview.api")


@dataclass(frozen=True, slots=True)
class ServiceConfig:
    """Configuration for the API service.

    - max_upload_bytes bounds what the service reads from a request
    - default_optimize is applied when a request does not pick a mode
    """

    max_upload_bytes: int = 10 * 1024 * 1024
    default_optimize: Optional[str] = None
    parser_limits: ParserLimits = field(default_factory=ParserLimits)


def load_service_config() -> ServiceConfig:
    optimize = (os.environ.get("XMLVIEW_OPTIMIZE") or "").strip().lower() or None
    if optimize is not None and optimize not in OPTIMIZE_MODES:
        log.warning("ignoring unknown XMLVIEW_OPTIMIZE=%r", optimize)
        optimize = None
    return ServiceConfig(
        max_upload_bytes=env_int("XMLVIEW_MAX_UPLOAD_BYTES", 10 * 1024 * 1024),
        default_optimize=optimize,
        parser_limits=ParserLimits.from_env(),
    )


def create_app(config: Optional[ServiceConfig] = None) -> FastAPI:
    """Create the FastAPI app."""

    cfg = config or load_service_config()

    log.setLevel(os.environ.get("XMLVIEW_LOG_LEVEL", "INFO").upper())

    app = FastAPI(title="xmlview API", version=__version__)
    app.state.cfg = cfg

    app.add_middleware(RequestIdMiddleware)
    app.add_middleware(AccessLogMiddleware)

    @app.get("/health", response_model=HealthOut)
    def health() -> HealthOut:
        return HealthOut(ok=True, version=__version__, max_upload_bytes=cfg.max_upload_bytes)

    @app.get("/policies", response_model=PoliciesOut)
    def policies() -> PoliciesOut:
        return PoliciesOut(casts=CASTS.names(), transformers=TRANSFORMERS.names())

    def _read_upload(upload: UploadFile) -> bytes:
        """Read an upload in chunks, failing with 413 past the limit."""

        chunks: List[bytes] = []
        total = 0
        while True:
            chunk = upload.file.read(1024 * 1024)
            if not chunk:
                break
            total += len(chunk)
            if total > cfg.max_upload_bytes:
                raise HTTPException(status_code=413, detail="upload_too_large")
            chunks.append(chunk)
        return b"".join(chunks)

    @app.post("/convert", response_model=ConvertOut)
    def convert(
        file: UploadFile = File(...),
        casts: Optional[str] = Form(default=None),
        transforms: Optional[str] = Form(default=None),
        optimize: Optional[str] = Form(default=None),
    ) -> ConvertOut:
        """Parse an uploaded XML document and return normalized JSON.

        Form fields
        - casts / transforms: comma-separated KEY=POLICY specs, applied
          casts first, each group in the given order
        - optimize: "camelcase" or "snakecase"
        """

        raw = _read_upload(file)

        try:
            ops = parse_field_operations("cast", split_specs(casts))
            ops += parse_field_operations("transform", split_specs(transforms))
        except ValueError as e:
            raise HTTPException(status_code=422, detail={"error": "invalid_spec", "reason": str(e)})

        mode = (optimize or "").strip().lower() or cfg.default_optimize
        if mode is not None and mode not in OPTIMIZE_MODES:
            raise HTTPException(status_code=422, detail={"error": "invalid_optimize", "reason": mode})

        try:
            collection = from_string(raw, limits=cfg.parser_limits)
            apply_field_operations(collection, ops)
            if mode:
                collection.optimize(mode)
            data = collection.collect()
        except XMLParseError as e:
            raise HTTPException(status_code=400, detail={"error": "invalid_xml", "reason": str(e)})
        except KeyNotFound as e:
            raise HTTPException(status_code=422, detail={"error": "key_not_found", "reason": str(e)})
        except InvalidPolicy as e:
            raise HTTPException(status_code=422, detail={"error": "invalid_policy", "reason": str(e)})
        except CoercionFailure as e:
            raise HTTPException(status_code=422, detail={"error": "coercion_failed", "reason": str(e)})

        log.info(
            "convert_ok",
            extra={"size_bytes": len(raw), "count": len(data), "operations": len(ops)},
        )

        return ConvertOut(
            filename=os.path.basename(file.filename or "input")[:255],
            size_bytes=len(raw),
            count=len(data),
            root_keys=list(data.keys()),
            applied=[op.describe() for op in ops] + ([f"optimize:{mode}"] if mode else []),
            data=data,
        )

    return app
