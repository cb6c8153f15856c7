import os
import uuid

from werkzeug.utils import secure_filename

from devhunt.services.errors import UploadError
from devhunt.utils.file_rules import IMAGE_MIMETYPES, allowed_file, is_image


class FileUploader:
    """Stores uploaded images in ``folder`` and returns their public URL.

    The width hint travels as a ``w`` query parameter; the image proxy in
    front of the uploads folder resizes on the fly.
    """

    def __init__(self, folder, url_base):
        self.folder = folder
        self.url_base = url_base.rstrip('/')

    def upload(self, file, width=None):
        filename = secure_filename(file.filename or '')
        if not is_image(file.mimetype):
            raise UploadError(f"Unsupported image type: {file.mimetype or 'unknown'}")
        if allowed_file(filename):
            ext = '.' + filename.rsplit('.', 1)[1].lower()
        else:
            ext = IMAGE_MIMETYPES[file.mimetype.lower()]

        out_name = f"{uuid.uuid4().hex}{ext}"
        dest = os.path.join(self.folder, out_name)

        try:
            os.makedirs(self.folder, exist_ok=True)
            file.save(dest)
        except OSError as e:
            raise UploadError(f"Could not store {filename or 'file'}: {e}") from e

        if os.path.getsize(dest) == 0:
            os.remove(dest)
            raise UploadError(f"Empty file: {filename or 'file'}")

        url = f"{self.url_base}/{out_name}"
        if width:
            url += f"?w={width}"
        return url
