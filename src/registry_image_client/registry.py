"""Async functional registry operations."""

from typing import Optional

from .core.manifest_client import ManifestClient
from .core.types import RegistryConfig
from .models import ImageReference
from .reference import parse_image_reference


def parse_reference(image_name: str, insecure: bool = False) -> ImageReference:
    """이미지 이름을 레지스트리, 저장소, 태그로 파싱합니다.

    Args:
        image_name: 이미지 이름
            - Docker Hub: "jgsqware/ubuntu-git", "zendesk/alpine:latest"
            - 명시적 레지스트리: "register.com:5080/zendesk/alpine:latest"
        insecure: 명시적 레지스트리(HTTP)를 사용하는 경우 True (기본값: False)

    Returns:
        ImageReference: 파싱된 이미지 참조 (registry, name, tag)

    Raises:
        DisallowedError: 레지스트리 호스트와 insecure 플래그가 맞지 않는 경우
        ValidationError: 이미지 이름이 비어 있거나 잘못된 형식인 경우

    Examples:
        # Docker Hub 이미지
        ref = parse_reference("jgsqware/ubuntu-git")
        # ref.registry == "https://registry-1.docker.io", ref.tag == "latest"

        # 명시적 레지스트리 (포트 포함)
        ref = parse_reference("register.com:5080/zendesk/alpine:latest", insecure=True)
        # ref.registry == "http://register.com:5080", ref.name == "zendesk/alpine"
    """
    return parse_image_reference(image_name, insecure)


async def pull(
    image_name: str,
    insecure: bool = False,
    timeout: int = 30,
    username: Optional[str] = None,
    password: Optional[str] = None,
) -> ImageReference:
    """이미지의 매니페스트를 조회하고 중복 없는 레이어 목록을 채웁니다.

    레지스트리가 401로 응답하면 한 번 인증한 뒤 한 번만 재시도합니다.

    Args:
        image_name: 이미지 이름 (예: "zendesk/alpine:latest", "localhost:5000/alpine")
        insecure: 명시적 레지스트리(HTTP)를 사용하는 경우 True (기본값: False)
        timeout: 요청 타임아웃 (초, 기본값: 30초)
        username: 레지스트리 사용자 이름 (선택사항)
        password: 레지스트리 비밀번호 (선택사항)

    Returns:
        ImageReference: 스키마 버전과 레이어가 채워진 이미지 참조

    Raises:
        DisallowedError: 레지스트리 호스트와 insecure 플래그가 맞지 않는 경우
        AuthenticationFailedError: 인증 과정이 실패한 경우
        UnauthorizedError: 인증 후에도 401 응답인 경우
        NotFoundError: 매니페스트가 없는 경우
        MalformedManifestError: 매니페스트를 해석할 수 없는 경우
        RegistryResponseError: 그 외 200이 아닌 응답
        RegistryConnectionError: 네트워크 오류

    Examples:
        # 로컬 레지스트리에서 매니페스트 조회
        image = await pull("localhost:5000/alpine", insecure=True)
        print(f"스키마 버전: {image.schema_version}")
        for layer in image.active_layers:
            print(layer.blob_sum)
    """
    config = RegistryConfig(timeout=timeout, username=username, password=password)
    async with ManifestClient(config) as client:
        return await client.pull(image_name, insecure)


async def get_manifest_layers(
    image_name: str,
    insecure: bool = False,
    timeout: int = 30,
    username: Optional[str] = None,
    password: Optional[str] = None,
) -> list[str]:
    """이미지 레이어의 digest 목록을 매니페스트 순서대로 반환합니다.

    Args:
        image_name: 이미지 이름 (예: "zendesk/alpine:latest")
        insecure: 명시적 레지스트리(HTTP)를 사용하는 경우 True (기본값: False)
        timeout: 요청 타임아웃 (초, 기본값: 30초)
        username: 레지스트리 사용자 이름 (선택사항)
        password: 레지스트리 비밀번호 (선택사항)

    Returns:
        list[str]: 중복이 제거된 레이어 digest 목록 (예: ["sha256:abc...", ...])

    Raises:
        RegistryError: 조회 실패 시

    Examples:
        digests = await get_manifest_layers("localhost:5000/alpine", insecure=True)
        print(f"레이어 수: {len(digests)}")
    """
    image = await pull(image_name, insecure, timeout, username, password)
    return [layer.blob_sum for layer in image.active_layers]


def blobs_uri(reference: ImageReference, digest: str) -> str:
    """blob 다운로드 URL을 생성합니다.

    Args:
        reference: 이미지 참조
        digest: blob digest (예: "sha256:13be4a52...")

    Returns:
        str: blob URL (예: "http://localhost:5000/v2/alpine/blobs/sha256:13be4a52...")
    """
    return reference.blobs_uri(digest)
