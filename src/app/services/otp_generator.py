import secrets


class OTPGenerator:
    """Six-digit numeric password reset codes, uniform over 100000..999999."""

    LOW = 100000
    HIGH = 999999

    def generate(self) -> str:
        return str(self.LOW + secrets.randbelow(self.HIGH - self.LOW + 1))
