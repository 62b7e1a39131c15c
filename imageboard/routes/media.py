from fastapi import APIRouter, Depends
from fastapi.responses import Response
from ..file_storage import FileStorage, get_storage
from ..media import sniff_mime

router = APIRouter()


@router.get('/{name}')
async def get_media(name: str, storage: FileStorage = Depends(get_storage)):
    """Serve a stored blob. The content type is sniffed from the bytes, never taken from the name."""
    data = await storage.read(name)
    return Response(content=data, media_type=sniff_mime(data) or 'application/octet-stream')
