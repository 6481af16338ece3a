from ioc_pivot.utils.domain_utils import refang, validate_domain
from ioc_pivot.utils.hashing import sha256_str, b64_str
