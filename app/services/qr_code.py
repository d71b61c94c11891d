"""
QRコード生成サービス
"""

import qrcode
import base64
from io import BytesIO

class QRCodeService:
    """QRコード生成を担当するサービスクラス"""

    @staticmethod
    def generate_qr_data_uri(
        data: str,
        box_size: int = 10,
        border: int = 4
    ) -> str:
        """
        任意の文字列（otpauth:// URIなど）からQRコード画像を生成

        Args:
            data: QRコードに含めるデータ
            box_size: QRコードのボックスサイズ
            border: ボーダーサイズ

        Returns:
            PNG画像の data URI（"data:image/png;base64,..."）
        """
        qr = qrcode.QRCode(
            version=1,
            error_correction=qrcode.constants.ERROR_CORRECT_L,
            box_size=box_size,
            border=border
        )
        qr.add_data(data)
        qr.make(fit=True)

        img = qr.make_image(fill_color="black", back_color="white")

        # base64エンコード
        buffer = BytesIO()
        img.save(buffer, format="PNG")
        img_str = base64.b64encode(buffer.getvalue()).decode()

        return f"data:image/png;base64,{img_str}"
