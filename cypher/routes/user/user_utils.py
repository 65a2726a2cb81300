# cypher/routes/user/user_utils.py
import os
from cypher.extensions.extension import storage
from cypher.routes.route_utils import non_text_field, non_text_message

ALLOWED_IMAGE_EXTENSIONS = {'.jpg', '.jpeg', '.png', '.gif', '.webp'}


def is_allowed_image(file):
    return os.path.splitext(file.filename)[1].lower() in ALLOWED_IMAGE_EXTENSIONS


def validate_profile_update(data, user):
    """Check the submitted profile fields. Absent fields stay unchanged."""
    field = non_text_field(data, 'artistName', 'bio')
    if field:
        return False, non_text_message(field)

    if 'artistName' in data:
        artist_name = (data.get('artistName') or '').strip()
        if len(artist_name) > 100:
            return False, "Der Künstlername darf höchstens 100 Zeichen lang sein."
        if not artist_name and user.is_creator:
            return False, "Creators müssen einen Künstlernamen angeben."

    if 'bio' in data and len(data.get('bio') or '') > 2000:
        return False, "Die Bio darf höchstens 2000 Zeichen lang sein."

    return True, None


def profile_payload(user):
    data = user.to_dict()
    data['profile_picture_url'] = (
        storage.get_signed_url(user.profile_picture_key) if user.profile_picture_key else None
    )
    return data
