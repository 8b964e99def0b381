import logging

from .generator import OTP as OTP
from .generator import Variant as Variant
from .generator import create_counter_otp as create_counter_otp
from .generator import create_time_otp as create_time_otp
from .generator import timecode as timecode
from .otp import DIGITS as DIGITS
from .otp import MAX_FACTOR as MAX_FACTOR
from .otp import TIME_STEP as TIME_STEP
from .otp import derive_code as derive_code
from .otp import dynamic_truncate as dynamic_truncate
from .otp import hmac_sha1 as hmac_sha1
from .otp import int_to_bytestring as int_to_bytestring
from .utils import format_code as format_code
from .utils import random_key as random_key
from .utils import strings_equal as strings_equal

logging.getLogger(__name__).addHandler(logging.NullHandler())
