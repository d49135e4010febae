from rest_framework import serializers


class CommaSeparatedListField(serializers.ListField):
    """리스트 또는 "a, b, c" 형태의 문자열을 모두 받는 문자열 리스트 필드"""

    def __init__(self, **kwargs):
        kwargs.setdefault("child", serializers.CharField(allow_blank=False, trim_whitespace=True))
        kwargs.setdefault("required", False)
        super().__init__(**kwargs)

    def to_internal_value(self, data):
        if isinstance(data, str):
            data = [item.strip() for item in data.split(",") if item.strip()]
        return super().to_internal_value(data)


class TrimmedCharField(serializers.CharField):
    """앞뒤 공백을 제거한 뒤 최대 길이만큼 잘라서 저장하는 문자열 필드.

    길이 초과를 오류로 처리하지 않고 잘라내기만 한다.
    """

    def __init__(self, cap=None, **kwargs):
        self.cap = cap
        kwargs.setdefault("required", False)
        kwargs.setdefault("allow_blank", True)
        super().__init__(**kwargs)

    def to_internal_value(self, data):
        value = super().to_internal_value(data)
        if self.cap is not None:
            value = value[: self.cap]
        return value
