"""User-facing error messages returned by the scan API (Spanish UI)."""

CREDENTIAL_MISSING = (
    "La variable de entorno API_KEY no está configurada en el servidor. "
    "La aplicación no puede conectarse al servicio de IA. "
    "Agregue la API_KEY a las variables de entorno de su proyecto."
)
MISSING_IMAGE = "Falta base64Image en el cuerpo de la solicitud"
INVALID_IMAGE_FORMAT = (
    "Formato de imagen no válido. Se esperaba una cadena base64 con data-URL."
)
SCAN_FAILED = (
    "No se pudo procesar el recibo con el servicio de IA. "
    "Verifique que su API_KEY sea válida y que la imagen sea clara."
)


def server_error(status_code: int) -> str:
    return f"Error del servidor: {status_code}."


def connection_failed(exc: Exception) -> str:
    return f"No se pudo conectar con el servidor: {exc}"
