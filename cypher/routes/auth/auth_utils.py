# cypher/routes/auth/auth_utils.py
import re
from cypher.models.user import UserRole
from cypher.routes.route_utils import non_text_field, non_text_message

EMAIL_PATTERN = re.compile(r'[a-z0-9._%+-]+@[a-z0-9.-]+\.[a-z]{2,}$')
VALID_ROLES = [role.value for role in UserRole]


def normalize_email(email):
    return (email or '').strip().lower()


def validate_registration_input(data):
    field = non_text_field(data, 'email', 'password', 'userRole', 'artistName')
    if field:
        return False, non_text_message(field)

    if not data.get('email') or not data.get('password'):
        return False, "Bitte gib eine E-Mail und ein Passwort an."

    if not EMAIL_PATTERN.match(normalize_email(data.get('email'))):
        return False, "E-Mail-Adresse ist ungültig."

    if len(data.get('password', '')) < 6:
        return False, "Das Passwort muss mindestens 6 Zeichen lang sein."

    role = data.get('userRole', UserRole.listener.value)
    if role not in VALID_ROLES:
        return False, f"Ungültige Rolle. Erlaubt: {', '.join(VALID_ROLES)}"

    if role == UserRole.creator.value and not (data.get('artistName') or '').strip():
        return False, "Creators müssen einen Künstlernamen angeben."

    return True, None


def validate_login_input(data):
    field = non_text_field(data, 'email', 'password')
    if field:
        return False, non_text_message(field)

    if not data.get('email') or not data.get('password'):
        return False, "Bitte gib eine E-Mail und ein Passwort an."
    return True, None


def validate_role_input(data):
    field = non_text_field(data, 'newRole', 'artistName')
    if field:
        return False, non_text_message(field)

    if 'newRole' not in data:
        return False, "Bitte gib eine neue Rolle an."

    if data.get('newRole') not in VALID_ROLES:
        return False, f"Ungültige Rolle. Erlaubt: {', '.join(VALID_ROLES)}"

    return True, None
