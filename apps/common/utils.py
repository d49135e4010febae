import logging
import os
import re
import unicodedata
import uuid

import boto3
import redis
from django.conf import settings
from django.db import DatabaseError, IntegrityError, transaction

from apps.common.exceptions import ConflictError, InvalidInputError, PersistenceError

logger = logging.getLogger(__name__)

SLUG_MAX_ATTEMPTS = 50
SLUG_SAVE_RETRIES = 3


def slugify_text(text):
    """제목을 URL용 slug로 변환.

    유니코드 정규화(NFKD) 후 결합 문자를 제거하고, 영숫자가 아닌 문자열은 '-' 하나로 바꾼다.

    >>> slugify_text("Café Déjà Vu!")
    'cafe-deja-vu'
    """
    normalized = unicodedata.normalize("NFKD", str(text or ""))
    stripped = "".join(ch for ch in normalized if not unicodedata.combining(ch))
    slug = re.sub(r"[^a-z0-9]+", "-", stripped.lower())
    return slug.strip("-")


def generate_unique_slug(model, text, exclude_id=None, field="slug"):
    """model 안에서 겹치지 않는 slug를 생성.

    base, base-2, base-3 ... 순서로 확인하고 SLUG_MAX_ATTEMPTS 번 안에 찾지 못하면
    6자리 랜덤 접미사를 붙인다.

    Args:
        model: slug 필드를 가진 모델 클래스.
        text (str): slug의 원본 문자열(제목, 이름).
        exclude_id: 수정 시 자기 자신은 중복 검사에서 제외.
        field (str): slug 필드 이름.

    Returns:
        str: 사용 가능한 slug.

    Raises:
        InvalidInputError: text로 slug를 만들 수 없는 경우.
        PersistenceError: 중복 확인 조회가 실패한 경우.
    """
    base = slugify_text(text)
    if not base:
        raise InvalidInputError("A valid title is required to generate slug.")

    queryset = model._default_manager.all()
    if exclude_id is not None:
        queryset = queryset.exclude(pk=exclude_id)

    candidate = base
    try:
        for counter in range(2, SLUG_MAX_ATTEMPTS + 2):
            if not queryset.filter(**{field: candidate}).exists():
                return candidate
            candidate = f"{base}-{counter}"
    except DatabaseError as e:
        logger.error("Slug lookup failed for %s", model.__name__, exc_info=e)
        raise PersistenceError() from e

    return f"{base}-{uuid.uuid4().hex[:6]}"


def save_with_unique_slug(instance, text, field="slug"):
    """slug를 채워서 저장. 저장 중 slug 유니크 제약에 걸리면 slug를 다시 만들어 재시도한다.

    동시에 같은 제목으로 생성 요청이 들어오면 조회 시점에는 비어있던 slug가
    저장 시점에 이미 사용 중일 수 있다.
    """
    for attempt in range(1, SLUG_SAVE_RETRIES + 1):
        setattr(instance, field, generate_unique_slug(type(instance), text, exclude_id=instance.pk, field=field))
        try:
            with transaction.atomic():
                instance.save()
            return instance
        except IntegrityError as e:
            if field not in str(e):
                raise
            logger.warning(
                "Slug collision on %s (%s), attempt %s", type(instance).__name__, getattr(instance, field), attempt
            )

    raise ConflictError(f"Duplicate value ({field}). Try a different name.")


def generate_unique_filename(filename):
    """uuid + 원본 파일명으로 저장용 파일명 생성"""
    name = os.path.basename(filename or "file")
    return f"{uuid.uuid4().hex}_{name}"


def get_s3_client():
    return boto3.client(
        "s3",
        endpoint_url=settings.AWS_S3_ENDPOINT_URL,
        aws_access_key_id=settings.AWS_ACCESS_KEY_ID,
        aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
        region_name=settings.AWS_S3_REGION_NAME,
    )


def upload_file_to_storage(uploaded_file, folder="uploads"):
    """업로드된 파일을 Object Storage에 저장하고 (key, 공개 URL)을 반환"""
    object_key = f"{folder}/{generate_unique_filename(uploaded_file.name)}"

    get_s3_client().upload_fileobj(
        uploaded_file,
        settings.AWS_STORAGE_BUCKET_NAME,
        object_key,
        ExtraArgs={"ContentType": getattr(uploaded_file, "content_type", None) or "application/octet-stream"},
    )
    logger.info("Uploaded %s to storage", object_key)

    public_url = f"{settings.AWS_S3_PUBLIC_URL.rstrip('/')}/{object_key}" if settings.AWS_S3_PUBLIC_URL else None
    return object_key, public_url


def client_meta(request):
    """요청자의 ip, user agent, referer 정보"""
    forwarded = request.META.get("HTTP_X_FORWARDED_FOR", "")
    ip = forwarded.split(",")[0].strip() if forwarded else request.META.get("REMOTE_ADDR", "")
    return {
        "ip": ip,
        "userAgent": request.META.get("HTTP_USER_AGENT", ""),
        "referer": request.META.get("HTTP_REFERER", ""),
    }


redis_client = redis.StrictRedis(
    host=settings.REDIS_HOST,
    port=settings.REDIS_PORT,
    db=0,
    decode_responses=True,  # 문자열 반환을 위해 decode_responses=True 설정
)
