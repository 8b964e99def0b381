import enum
import logging
import time
from typing import Callable, Optional, Union

from . import utils
from .otp import DIGITS, MAX_FACTOR, TIME_STEP, generate_otp

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


class Variant(enum.Enum):
    COUNTER = "counter"
    TIME = "time"


def timecode(for_time: float, time_step: int = TIME_STEP) -> int:
    """
    Converts a Unix timestamp to the TOTP moving factor.

    :param for_time: seconds since the epoch
    :param time_step: length of one TOTP window in seconds
    :returns: floor(for_time / time_step)
    """
    if time_step <= 0:
        raise ValueError("time_step must be positive")
    if for_time < 0:
        raise ValueError("clock returned a time before the Unix epoch")
    return int(for_time // time_step)


class OTP(object):
    """
    One-time password generator bound to a single secret.

    The variant tag decides how the moving factor advances: a counter
    instance increments it, a time instance resamples its clock. Use
    :func:`create_counter_otp` or :func:`create_time_otp` rather than
    building one directly.
    """

    def __init__(
        self,
        key: Union[str, bytes],
        variant: Variant,
        factor: Optional[int] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        """
        :param key: raw secret; text is encoded as UTF-8
        :param variant: how the moving factor advances
        :param factor: starting counter, counter instances only (defaults to 0)
        :param clock: callable returning seconds since the epoch, time instances only
        """
        if isinstance(key, str):
            key = key.encode("utf-8")
        if not isinstance(key, (bytes, bytearray)):
            raise TypeError("key must be bytes or str")
        if not isinstance(variant, Variant):
            raise TypeError("variant must be a Variant")

        self._key = bytes(key)
        self._variant = variant

        if variant is Variant.TIME:
            if factor is not None:
                raise ValueError("a time based OTP takes its factor from the clock")
            if clock is None:
                raise ValueError("a time based OTP needs a clock")
            self._clock = clock
            self._factor = self._sample_factor()
            return

        if factor is None:
            factor = 0
        if isinstance(factor, bool) or not isinstance(factor, int):
            raise TypeError("factor must be an integer")
        if factor < 0 or factor > MAX_FACTOR:
            raise ValueError("factor must be between 0 and 2**64 - 1")
        self._clock = None
        self._factor = factor

    def __repr__(self) -> str:
        return "{}(variant={}, factor={})".format(type(self).__name__, self._variant.value, self._factor)

    @property
    def variant(self) -> Variant:
        return self._variant

    def key(self) -> bytes:
        return self._key

    def current_factor(self) -> int:
        return self._factor

    def at(self, factor: int) -> int:
        """
        Generates the code for the given moving factor without changing state.

        :param factor: counter value or TOTP time step
        :returns: OTP
        """
        return generate_otp(self._key, factor)

    def current_code(self) -> int:
        """
        Returns the code for the stored factor. Does not advance and does not
        read the clock.
        """
        return self.at(self._factor)

    def produce_and_advance(self) -> int:
        """
        Returns a code and moves the factor on for the next call.

        Counter instances return the code for the current counter and then
        increment it. Time instances resample the clock first and return the
        code for the fresh time step.
        """
        if self._variant is Variant.COUNTER:
            if self._factor >= MAX_FACTOR:
                raise ValueError("counter is exhausted and would wrap to a previously used value")
            code = self.current_code()
            self._factor += 1
            logger.debug("counter advanced to %d", self._factor)
            return code

        self._factor = self._sample_factor()
        return self.current_code()

    def verify(self, otp: Union[int, str]) -> bool:
        """
        Verifies a candidate code against :meth:`current_code`.

        :param otp: the code to check, either as an int or a digit string
        """
        if isinstance(otp, int) and not 0 <= otp < 10**DIGITS:
            return False
        return utils.strings_equal(utils.format_code(otp), utils.format_code(self.current_code()))

    def _sample_factor(self) -> int:
        factor = timecode(self._clock())
        if factor > MAX_FACTOR:
            raise ValueError("clock returned a time beyond the 64-bit time step range")
        logger.debug("clock resampled, time step %d", factor)
        return factor


def create_counter_otp(key: Union[str, bytes], initial_counter: int = 0) -> OTP:
    """
    Creates an HOTP (RFC 4226) generator.

    :param key: raw secret; text is encoded as UTF-8
    :param initial_counter: starting HMAC counter value, defaults to 0
    """
    if initial_counter is None:
        raise TypeError("factor must be an integer")
    otp = OTP(key, Variant.COUNTER, factor=initial_counter)
    logger.debug("created counter OTP at counter %d", initial_counter)
    return otp


def create_time_otp(key: Union[str, bytes], clock: Clock = time.time) -> OTP:
    """
    Creates a TOTP (RFC 6238) generator with a 30 second time step.

    :param key: raw secret; text is encoded as UTF-8
    :param clock: callable returning seconds since the epoch
    """
    otp = OTP(key, Variant.TIME, clock=clock)
    logger.debug("created time OTP at time step %d", otp.current_factor())
    return otp
