import os
import qrcode


def render_qr_png(data: str, file_path: str) -> str:
    """Render `data` as a PNG QR image at `file_path` and return the path."""
    os.makedirs(os.path.dirname(file_path), exist_ok=True)

    qr = qrcode.QRCode(
        version=None,
        error_correction=qrcode.constants.ERROR_CORRECT_H,
        box_size=10,
        border=4,
    )
    qr.add_data(data)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")
    img.save(file_path)
    return file_path
