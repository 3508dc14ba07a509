from typing import Any, Final, Optional

DEFAULT_LANG: Final = "es"

TRANSLATIONS: Final[dict[str, dict[str, dict[str, Any]]]] = {
    "es": {
        "verification": {
            "subject": "Verifica tu correo - MyCAD",
            "title": "Verifica tu correo electrónico",
            "welcome": "¡Bienvenido a MyCAD",
            "content": (
                "Gracias por registrarte. Por favor verifica tu dirección de correo "
                "electrónico para obtener acceso completo a todas las funciones."
            ),
            "button": "Verificar Correo",
        },
        "password_reset": {
            "subject": "Restablece tu contraseña - MyCAD",
            "title": "Restablece tu contraseña",
            "greeting": "Hola",
            "content": (
                "Recibimos una solicitud para restablecer tu contraseña. Si no "
                "realizaste esta solicitud, puedes ignorar este correo."
            ),
            "button": "Restablecer Contraseña",
            "expiry": "Este enlace expirará en 1 hora.",
        },
        "report": {
            "subject": "Tu Reporte - MyCAD",
            "title": "Tu Reporte está Listo",
            "greeting": "Hola",
            "content": (
                "Se ha generado el reporte que solicitaste. Puedes descargarlo "
                "usando el botón de abajo."
            ),
            "button": "Descargar Reporte",
        },
        "notification": {
            "subject": "Notificación - MyCAD",
            "greeting": "Hola",
        },
        "footer": {
            "copyright": "Todos los derechos reservados.",
            "automated": (
                "Este es un correo automático, por favor no respondas a este mensaje."
            ),
        },
    },
    "en": {
        "verification": {
            "subject": "Verify your email - MyCAD",
            "title": "Verify your email address",
            "welcome": "Welcome to MyCAD",
            "content": (
                "Thank you for signing up. Please verify your email address to get "
                "full access to all features."
            ),
            "button": "Verify Email",
        },
        "password_reset": {
            "subject": "Reset your password - MyCAD",
            "title": "Reset your password",
            "greeting": "Hi",
            "content": (
                "We received a request to reset your password. If you didn't make "
                "this request, you can safely ignore this email."
            ),
            "button": "Reset Password",
            "expiry": "This link will expire in 1 hour.",
        },
        "report": {
            "subject": "Your Report - MyCAD",
            "title": "Your Report is Ready",
            "greeting": "Hi",
            "content": (
                "The report you requested has been generated. You can download it "
                "using the button below."
            ),
            "button": "Download Report",
        },
        "notification": {
            "subject": "Notification - MyCAD",
            "greeting": "Hi",
        },
        "footer": {
            "copyright": "All rights reserved.",
            "automated": "This is an automated email, please do not reply to this message.",
        },
    },
}


def get_translations(lang: Optional[str] = None) -> dict[str, dict[str, Any]]:
    """Returns the strings of a language, falling back to Spanish."""
    return TRANSLATIONS.get(lang or DEFAULT_LANG, TRANSLATIONS[DEFAULT_LANG])
