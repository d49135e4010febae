import json
import logging

import requests
from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

logger = logging.getLogger(__name__)


class RazorpayGatewayError(Exception):
    """Razorpay 가 주문 생성을 거절했거나 호출 자체가 실패한 경우

    Attributes:
        error: 게이트웨이가 돌려준 오류 본문(dict) 또는 문자열.
        status_code (int | None): HTTP 상태 코드.
    """

    def __init__(self, error, status_code=None):
        self.error = error
        self.status_code = status_code
        super().__init__(self.description)

    @property
    def description(self):
        """사람이 읽을 수 있는 설명이 있으면 그것을, 없으면 원본 오류를 직렬화해서 반환"""
        if isinstance(self.error, dict):
            return self.error.get("description") or json.dumps(self.error)
        return str(self.error)


class RazorpayGateway:
    """Razorpay Orders REST API 클라이언트"""

    def __init__(self, key_id, key_secret, base_url, timeout):
        self.key_id = key_id
        self.key_secret = key_secret
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def create_order(self, amount, currency, receipt):
        """주문 생성 (자동 캡처)

        Args:
            amount (int): minor unit 금액 (paise).
            currency (str): 통화 코드.
            receipt (str): 영수증 번호 (최대 40자).

        Returns:
            dict: 게이트웨이 주문 정보 (id, amount, currency, ...).

        Raises:
            RazorpayGatewayError: 네트워크 오류 또는 4xx/5xx 응답.
        """
        payload = {"amount": amount, "currency": currency, "receipt": receipt, "payment_capture": 1}
        try:
            response = requests.post(
                f"{self.base_url}/orders",
                json=payload,
                auth=(self.key_id, self.key_secret),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise RazorpayGatewayError(str(e)) from e

        if response.status_code >= 400:
            try:
                body = response.json()
            except ValueError:
                body = response.text
            if isinstance(body, dict) and isinstance(body.get("error"), dict):
                body = body["error"]
            raise RazorpayGatewayError(body, status_code=response.status_code)

        return response.json()


def get_gateway():
    if not settings.RAZORPAY_KEY_ID or not settings.RAZORPAY_KEY_SECRET:
        raise ImproperlyConfigured("Missing RAZORPAY_KEY_ID or RAZORPAY_KEY_SECRET")

    return RazorpayGateway(
        key_id=settings.RAZORPAY_KEY_ID,
        key_secret=settings.RAZORPAY_KEY_SECRET,
        base_url=settings.RAZORPAY_API_BASE,
        timeout=settings.RAZORPAY_TIMEOUT,
    )
