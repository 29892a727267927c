"""English/French messages and the view models built from service results."""

from flask import current_app, has_request_context, request

LANGUAGE_COOKIE = 'language'

MESSAGES = {
    'en': {
        'home_title': "Car Part Inventory",
        'about': "Track car parts and the projects that use them.",
        'language_set': "Language set to English.",
        'login_success': "{username} has successfully logged in!",
        'login_failed': "Invalid username or password.",
        'logout_success': "{username} has successfully logged out!",
        'signup_success': "{username} has successfully registered!",
        'login_required': "You must be logged in to do that.",
        'admin_required': "Only administrators can do that.",
        'part_created': "Created part: Part #{part_number}, {name}, Condition: {condition}",
        'part_found': "Found part #{part_number}.",
        'part_not_found': "Could not find any parts with part number '{part_number}'",
        'part_updated': "Updated part name with part number {part_number} to {name}",
        'part_deleted': "Deleted part with part number {part_number}",
        'parts_listed': "Showing all car parts.",
        'project_created': "You have successfully added a project!",
        'project_updated': "Project {project_id} updated.",
        'project_deleted': "Project {project_id} deleted.",
        'project_not_found': "Project {project_id} does not exist.",
        'project_member_required': "Only members of this project can do that.",
        'projects_listed': "Showing your projects.",
        'project_part_added': "Part #{part_number} added to project {project_id}.",
        'project_part_removed': "Part #{part_number} removed from project {project_id}.",
        'project_user_added': "{username} added to project {project_id}.",
        'users_listed': "Showing all users.",
        'error_validation': "Invalid input, check that all fields are alpha numeric where applicable.",
        'error_not_found': "The requested record does not exist.",
        'error_duplicate_user': "Username already exists.",
        'error_integrity': "The referenced project, part or user does not exist.",
        'error_owner_required': "The project is not associated with a user.",
        'error_store_unavailable': "Error while connecting to database.",
        'error_internal': "Unexpected error, please try again later.",
    },
    'fr': {
        'home_title': "Inventaire de pièces d'auto",
        'about': "Suivez les pièces d'auto et les projets qui les utilisent.",
        'language_set': "Langue définie sur le français.",
        'login_success': "{username} s'est connecté avec succès!",
        'login_failed': "Nom d'utilisateur ou mot de passe invalide.",
        'logout_success': "{username} s'est déconnecté avec succès!",
        'signup_success': "{username} s'est enregistré avec succès!",
        'login_required': "Vous devez être connecté pour faire cela.",
        'admin_required': "Seuls les administrateurs peuvent faire cela.",
        'part_created': "Pièce créée : Pièce #{part_number}, {name}, État : {condition}",
        'part_found': "Pièce #{part_number} trouvée.",
        'part_not_found': "Aucune pièce trouvée avec le numéro '{part_number}'",
        'part_updated': "Nom de la pièce numéro {part_number} changé pour {name}",
        'part_deleted': "Pièce numéro {part_number} supprimée",
        'parts_listed': "Toutes les pièces d'auto.",
        'project_created': "Vous avez ajouté un projet avec succès!",
        'project_updated': "Projet {project_id} mis à jour.",
        'project_deleted': "Projet {project_id} supprimé.",
        'project_not_found': "Le projet {project_id} n'existe pas.",
        'project_member_required': "Seuls les membres de ce projet peuvent faire cela.",
        'projects_listed': "Vos projets.",
        'project_part_added': "Pièce #{part_number} ajoutée au projet {project_id}.",
        'project_part_removed': "Pièce #{part_number} retirée du projet {project_id}.",
        'project_user_added': "{username} ajouté au projet {project_id}.",
        'users_listed': "Tous les utilisateurs.",
        'error_validation': "Entrée invalide, vérifiez que les champs sont alphanumériques.",
        'error_not_found': "L'enregistrement demandé n'existe pas.",
        'error_duplicate_user': "Ce nom d'utilisateur existe déjà.",
        'error_integrity': "Le projet, la pièce ou l'utilisateur référencé n'existe pas.",
        'error_owner_required': "Le projet n'est associé à aucun utilisateur.",
        'error_store_unavailable': "Erreur de connexion à la base de données.",
        'error_internal': "Erreur inattendue, veuillez réessayer plus tard.",
    },
}


def get_language() -> str:
    default = current_app.config.get('DEFAULT_LANGUAGE', 'en')
    if not has_request_context():
        return default
    lang = request.cookies.get(LANGUAGE_COOKIE)
    if lang in current_app.config.get('SUPPORTED_LANGUAGES', MESSAGES):
        return lang
    return default


def translate(key: str, lang: str = 'en', **params) -> str:
    catalog = MESSAGES.get(lang, MESSAGES['en'])
    template = catalog.get(key) or MESSAGES['en'][key]
    return template.format(**params)


def build_view(lang: str, result=None, message_key: str = None, **params) -> dict:
    """View model for a service result: the result itself plus a localized message."""
    view = {'language': lang}
    if message_key:
        view['message'] = translate(message_key, lang, **params)
    if result is not None:
        view['data'] = result
    return view
