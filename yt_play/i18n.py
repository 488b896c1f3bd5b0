# i18n.py
import locale

MESSAGES = {
    "en": {
        "app_help": "Play a YouTube playlist from a local audio cache.",
        "help_url": "URL of the playlist to play.",
        "help_verbose": "Use verbose output.",
        "help_refresh": "Refresh cached songs.",
        "help_shuffle": "Shuffle playback.",
        "help_yt_dlp_arguments": "Custom yt-dlp arguments.",
        "help_mpv_arguments": "Custom mpv arguments.",
        "help_config": "Path to a YAML configuration file.",
        "help_lang": "Set the language for output messages (e.g., 'en' or 'fr').",
        "help_version": "Show the version and exit.",
        "found_playlist_id": "Found Playlist ID: {playlist_id}",
        "using_cache_dir": "Using Cache Directory: {path}",
        "creating_cache_dir": "Creating cache directory {path}",
        "fetching_playlist": "Fetching playlist {playlist_id}...",
        "fetched_playlist": "Fetched Playlist Data: '{title}' with {count} entries",
        "playlist_entry": "  - {title} [{entry_id}]",
        "deleting_file": "Deleting erroneous file: {path}",
        "downloading_missing": "Downloading {count} missing songs...",
        "cache_up_to_date": "Cache is up to date.",
        "playing": "Playing {path}",
    },
    "fr": {
        "app_help": "Lit une playlist YouTube depuis un cache audio local.",
        "help_url": "URL de la playlist à lire.",
        "help_verbose": "Affiche des informations détaillées.",
        "help_refresh": "Rafraîchit les morceaux en cache.",
        "help_shuffle": "Lecture aléatoire.",
        "help_yt_dlp_arguments": "Arguments supplémentaires pour yt-dlp.",
        "help_mpv_arguments": "Arguments supplémentaires pour mpv.",
        "help_config": "Chemin vers un fichier de configuration YAML.",
        "help_lang": "Définit la langue des messages de sortie (ex: 'en' ou 'fr').",
        "help_version": "Affiche la version et quitte.",
        "found_playlist_id": "ID de playlist trouvé : {playlist_id}",
        "using_cache_dir": "Dossier de cache utilisé : {path}",
        "creating_cache_dir": "Création du dossier de cache {path}",
        "fetching_playlist": "Récupération de la playlist {playlist_id}...",
        "fetched_playlist": "Données de la playlist récupérées : '{title}' avec {count} morceaux",
        "playlist_entry": "  - {title} [{entry_id}]",
        "deleting_file": "Suppression du fichier erroné : {path}",
        "downloading_missing": "Téléchargement de {count} morceaux manquants...",
        "cache_up_to_date": "Le cache est à jour.",
        "playing": "Lecture de {path}",
    },
}

_current_lang = "en"


def get_default_lang():
    try:
        lang_code, _ = locale.getlocale()
        return "fr" if lang_code and lang_code.lower().startswith("fr") else "en"
    except (ValueError, TypeError):
        return "en"


def get_lang():
    return _current_lang


def set_lang(lang: str):
    global _current_lang
    _current_lang = lang if lang in MESSAGES else "en"


def get_message(key, **kwargs):
    lang = _current_lang
    if lang not in MESSAGES or key not in MESSAGES[lang]:
        # Fallback to English if key not found in current language
        lang = "en"

    message_template = MESSAGES[lang].get(key, f"Translation missing for key: {key}")

    try:
        return message_template.format(**kwargs)
    except KeyError as e:
        # This can happen if a placeholder is missing in kwargs
        return f"Formatting error for key '{key}': missing placeholder {e}"


# Initialize with default system language
set_lang(get_default_lang())
