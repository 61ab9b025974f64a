"""
유틸리티 함수 모듈
"""
import re
from datetime import datetime, timezone


def utc_now() -> datetime:
    """
    현재 UTC 시각

    Returns:
        timezone 정보가 포함된 datetime
    """
    return datetime.now(timezone.utc)


def normalize_registry_number(registry_number: str) -> str:
    """
    사건 등록번호(CNR) 정규화 (앞뒤 공백 제거 + 대문자)

    Args:
        registry_number: 원본 등록번호

    Returns:
        정규화된 등록번호
    """
    return registry_number.strip().upper()


def mask_personal_info(text: str, mask_char: str = "*") -> str:
    """
    개인정보 마스킹

    Args:
        text: 원본 텍스트
        mask_char: 마스킹 문자

    Returns:
        마스킹된 텍스트
    """
    # 전화번호 마스킹 (98765-43210 -> 98765-*****, +91 9876543210 -> +91 98******10)
    text = re.sub(r'(\d{5})-(\d{5})', r'\1-' + mask_char * 5, text)
    text = re.sub(r'\b(\d{2})\d{6}(\d{2})\b', r'\1' + mask_char * 6 + r'\2', text)

    # 이메일 마스킹 (user@example.com -> u***@example.com)
    text = re.sub(r'(\w{1,3})(\w*)(@\w+\.\w+)', r'\1' + mask_char * 3 + r'\3', text)

    return text

