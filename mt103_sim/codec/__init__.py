"""MT103 wire format: field helpers in ``fields``, encoder/decoder in ``mt103``."""
