"""FastAPI service exposing the Go declaration scanner."""

from __future__ import annotations

import argparse
import zipfile
from pathlib import Path
from tempfile import TemporaryDirectory

from fastapi import FastAPI, File, HTTPException, UploadFile
from fastapi.responses import JSONResponse
from networkx.readwrite import json_graph
from pydantic import BaseModel

from .hints import scan_document
from .pipeline import build_graph_from_root


app = FastAPI(title="gonav")


class HintsRequest(BaseModel):
    text: str
    path: str | None = None


def _extract_zip_bytes(zip_bytes: bytes, target_dir: Path) -> Path:
    if not zip_bytes:
        raise HTTPException(status_code=400, detail="Empty archive.")

    archive_path = target_dir / "repo.zip"
    archive_path.write_bytes(zip_bytes)

    try:
        with zipfile.ZipFile(archive_path) as archive:
            archive.extractall(target_dir / "repo")
    except zipfile.BadZipFile as exc:
        raise HTTPException(status_code=400, detail="Invalid zip archive.") from exc

    extracted_root = target_dir / "repo"
    entries = list(extracted_root.iterdir())
    if len(entries) == 1 and entries[0].is_dir():
        return entries[0]
    return extracted_root


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/hints")
def hints(request: HintsRequest) -> dict:
    scanned = scan_document(request.text, path=request.path)
    return {
        "path": request.path,
        "interfaces": [
            {
                "name": block.name,
                "start_line": block.start_line,
                "end_line": block.end_line,
                "methods": [signature.name for signature in block.methods],
            }
            for block in scanned.interfaces
        ],
        "hints": [hint.to_dict() for hint in scanned.hints],
    }


@app.post("/parse")
def parse_repo(
    file: UploadFile = File(...),
    max_files: int | None = None,
) -> JSONResponse:
    if not file.filename or not file.filename.lower().endswith(".zip"):
        raise HTTPException(status_code=400, detail="Upload a .zip archive.")

    with TemporaryDirectory() as temp_dir:
        root = _extract_zip_bytes(file.file.read(), Path(temp_dir))
        graph = build_graph_from_root(root, output_path=None, max_files=max_files)
        data = json_graph.node_link_data(graph, edges="links")
        return JSONResponse(content=data)


def main() -> int:
    parser = argparse.ArgumentParser(description="Run the gonav HTTP API")
    parser.add_argument("--host", default="127.0.0.1", help="Bind host")
    parser.add_argument("--port", type=int, default=9000, help="Bind port")
    args = parser.parse_args()

    import uvicorn

    uvicorn.run("gonav.api:app", host=args.host, port=args.port, reload=False)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
