"""Error categories raised by the Pact command client."""


class PactError(Exception):
    """Base exception for all pact_api errors."""


class TypeMismatch(PactError, TypeError):
    """A value is present but has the wrong type."""


class InvalidArgument(PactError, ValueError):
    """A value has the right type but is unusable (empty batch, bad hex...)."""


class MissingField(PactError):
    """A required field is absent."""


class MissingEndpoint(MissingField):
    """No server address was configured for a transport call."""


class MalformedKeyPair(PactError):
    """Keypair lacks its publicKey or secretKey."""


class HashMismatch(PactError):
    """Signatures in one command were produced over different payloads."""


class SignatureError(PactError):
    """Signature verification failed."""


class CanonicalizationError(InvalidArgument):
    """A command could not be serialized to its canonical JSON form."""
