"""
EccoServ - Uploads
Fotos e documentos anexados às visitas, salvos em UPLOAD_DIR
"""
import os
import uuid
import logging
from typing import Iterable, List, Optional

from fastapi import UploadFile

from eccoserv.core.config import settings
from eccoserv.core.exceptions import ValidationError

logger = logging.getLogger(__name__)

PHOTOS = "photos"
DOCUMENTS = "documents"


def upload_root() -> str:
    return os.path.abspath(settings.UPLOAD_DIR)


async def save_upload(file: UploadFile, folder: str) -> str:
    """
    Salva o arquivo com nome único e retorna o caminho relativo
    (ex.: "photos/3f2a....jpg"), servido em /uploads/<caminho>
    """
    if folder == PHOTOS and (not file.content_type or not file.content_type.startswith("image/")):
        raise ValidationError(f"Photo {file.filename!r} must be an image", {"file": file.filename})

    contents = await file.read()
    if len(contents) > settings.max_upload_bytes:
        raise ValidationError(
            f"File {file.filename!r} exceeds {settings.MAX_UPLOAD_SIZE_MB}MB",
            {"file": file.filename},
        )

    name = file.filename or ""
    ext = name.rsplit(".", 1)[-1].lower() if "." in name else "bin"
    filename = f"{uuid.uuid4().hex}.{ext}"

    target_dir = os.path.join(upload_root(), folder)
    os.makedirs(target_dir, exist_ok=True)
    with open(os.path.join(target_dir, filename), "wb") as f:
        f.write(contents)

    return f"{folder}/{filename}"


async def save_uploads(files: Optional[Iterable[UploadFile]], folder: str, saved: List[str]) -> List[str]:
    """Salva vários arquivos; `saved` acumula tudo que já foi gravado (para limpeza)"""
    stored = []
    for file in files or []:
        if not file.filename:
            continue
        path = await save_upload(file, folder)
        saved.append(path)
        stored.append(path)
    return stored


def discard_uploads(paths: Iterable[str]):
    """Remove arquivos gravados por uma operação que falhou"""
    for path in paths:
        full_path = os.path.join(upload_root(), path)
        try:
            os.remove(full_path)
        except FileNotFoundError:
            continue
        logger.info("Discarded upload %s", path)
