from typing import Any, Optional, Type


class AdapterResult:
    """
    Résultat uniforme des adaptateurs (Stripe, stockage des commandes).
    - success=True: data contient la valeur utile (id client, client_secret, session, event, ligne)
    - success=False: error contient le message, exception l'erreur d'origine si disponible
    """

    def __init__(
        self,
        success: bool,
        data: Any = None,
        error: Optional[str] = None,
        exception: Optional[BaseException] = None,
    ):
        self.success = success
        self.data = data
        self.error = error
        self.exception = exception

    @classmethod
    def ok(cls, data: Any = None) -> "AdapterResult":
        return cls(True, data=data)

    @classmethod
    def fail(cls, error: str, exception: Optional[BaseException] = None) -> "AdapterResult":
        return cls(False, error=error, exception=exception)

    def unwrap(self, exc_type: Type[Exception]) -> Any:
        """Retourne data, ou lève exc_type(error) chaîné à l'exception d'origine."""
        if self.success:
            return self.data
        raise exc_type(self.error or "échec de l'adaptateur") from self.exception

    def __bool__(self) -> bool:
        return self.success

    def __repr__(self) -> str:
        if self.success:
            return f"AdapterResult(ok, data={self.data!r})"
        return f"AdapterResult(fail, error={self.error!r})"
