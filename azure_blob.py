from azure.storage.blob import BlobServiceClient, ContentSettings
import os
import uuid

account = os.getenv("AZURE_STORAGE_ACCOUNT")
key = os.getenv("AZURE_STORAGE_KEY")
KOS_IMAGE_CONTAINER = os.getenv("KOS_IMAGE_CONTAINER", "kos-images")

_blob_service = None


def get_blob_service() -> BlobServiceClient:
     """Blob client, created on first use so imports work without credentials."""
     global _blob_service
     if _blob_service is None:
          _blob_service = BlobServiceClient.from_connection_string(
               f"DefaultEndpointsProtocol=https;"
               f"AccountName={account};"
               f"AccountKey={key};"
               f"EndpointSuffix=core.windows.net"
          )
     return _blob_service


def upload_to_blob(file, container: str, prefix: str | int) -> tuple[str, str]:
     """
     Upload an UploadFile under <prefix>/<uuid><ext>.

     Returns (object name, public URL).
     """
     ext = os.path.splitext(file.filename or "")[1]
     filename = f"{prefix}/{uuid.uuid4()}{ext}"
     blob_client = get_blob_service().get_blob_client(container=container, blob=filename)
     blob_client.upload_blob(
          file.file,
          overwrite=True,
          content_settings=ContentSettings(content_type=file.content_type),
     )
     return filename, f"https://{account}.blob.core.windows.net/{container}/{filename}"


def delete_from_blob(container: str, blob_name: str):
     """
     Deletes an object from Azure Blob Storage by container and object name
     """
     blob_client = get_blob_service().get_blob_client(
          container=container,
          blob=blob_name
     )
     blob_client.delete_blob()
