from supabase import Client
from fitdash.config import settings
from typing import Optional
import logging

logger = logging.getLogger(__name__)


class LogoStorage:
    """Gym logos in the Supabase storage bucket, one folder per owner"""

    def __init__(self, supabase: Client, bucket_name: Optional[str] = None):
        self.bucket_name = bucket_name or settings.gym_logos_bucket
        if not self.bucket_name:
            raise ValueError("Gym logo bucket name must be configured")
        self._bucket = supabase.storage.from_(self.bucket_name)

    @staticmethod
    def logo_key(user_id: str, filename: str) -> str:
        """<user_id>/logo.<ext>; the folder prefix is what the storage policies check"""
        ext = filename.rsplit(".", 1)[-1].lower() if filename and "." in filename else "png"
        return f"{user_id}/logo.{ext}"

    def upload_file(self, file_content: bytes, key: str, content_type: str = "image/png") -> str:
        """Upload (or replace) a file and return its public URL"""
        try:
            self._bucket.upload(
                key,
                file_content,
                {"content-type": content_type, "upsert": "true"}
            )
        except Exception as e:
            logger.error(f"Failed to upload logo to {self.bucket_name}/{key}: {str(e)}")
            raise
        return self._bucket.get_public_url(key)
