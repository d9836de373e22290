"""Esito di validazione XSD.

IT: Value object restituito dai validatori di schema.
EN: Value object returned by schema validators.
"""

from pydantic import BaseModel, ConfigDict, Field, computed_field

from felkit.models.enums import Verdict


class ValidationResult(BaseModel):
    """Risultato della validazione di un documento contro uno schema.

    IT: ``verdict`` distingue VALID, INVALID e UNKNOWN (motore assente);
        ``errors`` conserva l'ordine dei messaggi del motore.
    EN: ``verdict`` distinguishes VALID, INVALID and UNKNOWN (no engine);
        ``errors`` keeps the engine's message order.
    """

    model_config = ConfigDict(frozen=True)

    verdict: Verdict
    errors: list[str] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def valid(self) -> bool | None:
        """True/False, oppure None se la validazione non è stata possibile."""
        if self.verdict is Verdict.UNKNOWN:
            return None
        return self.verdict is Verdict.VALID

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(verdict=Verdict.VALID)

    @classmethod
    def failed(cls, errors: list[str]) -> "ValidationResult":
        return cls(verdict=Verdict.INVALID, errors=list(errors))

    @classmethod
    def unknown(cls, reason: str) -> "ValidationResult":
        return cls(verdict=Verdict.UNKNOWN, errors=[reason])
