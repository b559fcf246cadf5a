class ResponseAlreadyReceived(Exception):
    """Raised when a caller tries to revert a response flag that is already true."""

    def __init__(self, entity: str, entity_id: str):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(
            f"{entity} {entity_id}: resposta já recebida, o status não pode ser revertido"
        )


class InvalidAffiliateCode(Exception):
    """Raised when an affiliate code is not valid URL-safe base64 of an id."""

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Código de afiliado inválido: {code}")
