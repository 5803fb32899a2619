"""常量定义：集中维护状态码、令牌类型与默认值。"""

from fastapi import status

HTTP_STATUS_OK = status.HTTP_200_OK
HTTP_STATUS_BAD_REQUEST = status.HTTP_400_BAD_REQUEST
HTTP_STATUS_UNAUTHORIZED = status.HTTP_401_UNAUTHORIZED
HTTP_STATUS_CONFLICT = status.HTTP_409_CONFLICT
HTTP_STATUS_PAYLOAD_TOO_LARGE = status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
HTTP_STATUS_INTERNAL_ERROR = status.HTTP_500_INTERNAL_SERVER_ERROR

ACCESS_TOKEN_TYPE = "bearer"
# 滑动续期后新令牌所在的响应头
ACCESS_TOKEN_HEADER = "X-Access-Token"

# 读取上传流时的分块大小
UPLOAD_CHUNK_SIZE = 64 * 1024
