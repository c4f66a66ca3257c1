"""ข้อผิดพลาดของโดเมนที่ FastAPI แปลงเป็น HTTP status ให้โดยตรง"""

from typing import Optional

from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    def __init__(self, detail: str = "ไม่พบข้อมูล"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class ValidationError(HTTPException):
    def __init__(self, detail: str = "ข้อมูลไม่ถูกต้อง"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class ConflictError(HTTPException):
    def __init__(self, detail: str = "ข้อมูลขัดแย้งกับสถานะปัจจุบัน"):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class VersionConflictError(ConflictError):
    """บันทึกจากเวอร์ชันฐานที่ไม่ใช่เวอร์ชันล่าสุด

    ผู้เรียกต้องโหลดเวอร์ชันล่าสุดแล้วส่งการแก้ไขใหม่เอง ระบบไม่ retry ให้
    """

    def __init__(self, entry_id: int, base_version: int, current_version: Optional[int] = None):
        self.entry_id = entry_id
        self.base_version = base_version
        self.current_version = current_version
        if current_version is None:
            detail = f"รายการ {entry_id} ถูกแก้ไขโดยผู้อื่นแล้ว กรุณาโหลดเวอร์ชันล่าสุดก่อนบันทึก"
        else:
            detail = (
                f"รายการ {entry_id} อยู่ที่เวอร์ชัน {current_version} แต่แก้ไขจากเวอร์ชัน {base_version} "
                "กรุณาโหลดเวอร์ชันล่าสุดก่อนบันทึก"
            )
        super().__init__(detail=detail)
