"""App-wide shared values used across multiple features."""

import re

APP_NAME = "MonHubImmo"
APP_TAGLINE = "Votre plateforme de collaboration immobilière"
APP_VERSION = "1.0.0"

# User types
USER_TYPE_AGENT = "agent"
USER_TYPE_APPORTEUR = "apporteur"
USER_TYPE_GUEST = "guest"
USER_TYPE_ADMIN = "admin"

USER_TYPE_LABELS = {
    USER_TYPE_AGENT: "Agent Immobilier",
    USER_TYPE_APPORTEUR: "Apporteur d'Affaires",
}

# Date & time formats (strftime equivalents of DD/MM/YYYY, ...)
DATE_FORMAT_SHORT = "%d/%m/%Y"
DATE_FORMAT_WITH_TIME = "%d/%m/%Y %H:%M"
TIME_FORMAT = "%H:%M"

FRENCH_MONTHS = [
    "janvier",
    "février",
    "mars",
    "avril",
    "mai",
    "juin",
    "juillet",
    "août",
    "septembre",
    "octobre",
    "novembre",
    "décembre",
]

FRENCH_WEEKDAYS = [
    "lundi",
    "mardi",
    "mercredi",
    "jeudi",
    "vendredi",
    "samedi",
    "dimanche",
]

CURRENCY_SYMBOL = "€"
CURRENCY_CODE = "EUR"

# Pagination
ITEMS_PER_PAGE = 20
MAX_ITEMS_PER_PAGE = 100

# File upload
FILE_UPLOAD_MAX_SIZE_BYTES = 10 * 1024 * 1024
FILE_UPLOAD_MAX_SIZE_MB = 10
ALLOWED_IMAGE_TYPES = ["image/jpeg", "image/png", "image/webp"]
ALLOWED_DOC_TYPES = ["application/pdf", "application/msword"]
MAX_IMAGES_PER_UPLOAD = 10

# Validation
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_PATTERN = re.compile(r"^(?:(?:\+|00)33|0)\s*[1-9](?:[\s.-]*\d{2}){4}$")
POSTAL_CODE_PATTERN = re.compile(r"^\d{5}$")
TIME_SLOT_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")

# Messages
GENERAL_MESSAGES = {
    "LOADING": "Chargement...",
    "SAVING": "Enregistrement...",
    "SAVED": "Enregistré avec succès",
    "ERROR": "Une erreur est survenue",
    "NO_DATA": "Aucune donnée disponible",
    "CONFIRM_DELETE": "Êtes-vous sûr de vouloir supprimer ?",
}

ERROR_BOUNDARY_TITLE = "Une erreur est survenue"
ERROR_BOUNDARY_MESSAGE = (
    "Une erreur inattendue s'est produite. "
    "Veuillez réessayer ou contacter le support si le problème persiste."
)

# Routes
LOGIN_ROUTE = "/auth/login"
DASHBOARD_ROUTE = "/dashboard"

PUBLIC_ROUTES = [
    "/",
    "/auth/login",
    "/auth/signup",
    "/auth/forgot-password",
    "/auth/reset-password",
    "/auth/verify-email",
    "/monagentimmo",
]

PROTECTED_ROUTES = [
    "/dashboard",
    "/chat",
    "/collaboration",
    "/search-ads/create",
    "/appointments",
]

# ==================== COLLABORATION ====================

# Ordered progress steps of a collaboration
PROGRESS_STEPS = [
    ("accord_collaboration", "Accord de collaboration"),
    ("premier_contact", "Premier contact client"),
    ("visite_programmee", "Visite programmée"),
    ("visite_realisee", "Visite réalisée"),
    ("retour_client", "Retour client"),
    ("offre_en_cours", "Offre en cours"),
    ("negociation_en_cours", "Négociation en cours"),
    ("compromis_signe", "Compromis signé"),
    ("signature_notaire", "Signature notaire"),
    ("affaire_conclue", "Affaire conclue"),
]
PROGRESS_STEP_IDS = [step_id for step_id, _ in PROGRESS_STEPS]

COMPLETION_REASONS = {
    "vente_conclue_collaboration": "Vente conclue grâce à la collaboration",
    "vente_conclue_seul": "Vente conclue sans la collaboration",
    "bien_retire": "Bien retiré de la vente",
    "mandat_expire": "Mandat expiré",
    "client_desiste": "Le client s'est désisté",
    "vendu_tiers": "Vendu par un tiers",
    "sans_suite": "Sans suite",
}

# Percentage cap for proposals on apporteur posts
APPORTEUR_MAX_COMMISSION = 50

COLLABORATION_STATUS_LABELS = {
    "pending": "En attente",
    "accepted": "Acceptée",
    "rejected": "Refusée",
    "active": "Active",
    "completed": "Terminée",
    "cancelled": "Annulée",
}

COLLABORATION_ERRORS = {
    "STATUS_UPDATE_FAILED": "Impossible de mettre à jour le statut de la collaboration",
    "PROGRESS_UPDATE_FAILED": "Impossible de mettre à jour la progression",
    "NOT_ACTIVE": "La collaboration doit être active pour effectuer cette action",
    "LOAD_FAILED": "Impossible de charger la collaboration",
}

COLLABORATION_TOAST_MESSAGES = {
    "PROPOSE_SUCCESS": "Proposition de collaboration envoyée",
    "PROPOSE_ERROR": "Erreur lors de l'envoi de la proposition",
    "ACCEPT_SUCCESS": "Collaboration acceptée",
    "REJECT_SUCCESS": "Collaboration refusée",
    "RESPOND_ERROR": "Erreur lors de la réponse à la collaboration",
    "CANCEL_SUCCESS": "Collaboration annulée",
    "CANCEL_ERROR": "Erreur lors de l'annulation",
    "COMPLETE_SUCCESS": "Collaboration terminée avec succès",
    "COMPLETE_ERROR": "Erreur lors de la finalisation",
    "NOTE_SUCCESS": "Note ajoutée",
    "NOTE_ERROR": "Erreur lors de l'ajout de la note",
    "PROGRESS_SUCCESS": "Statut de progression mis à jour",
    "PROGRESS_ERROR": "Erreur lors de la mise à jour de la progression",
    "SIGN_SUCCESS": "Contrat signé",
    "SIGN_ERROR": "Erreur lors de la signature du contrat",
    "CONTRACT_UPDATE_SUCCESS": "Contrat mis à jour",
    "CONTRACT_UPDATE_ERROR": "Erreur lors de la mise à jour du contrat",
    "STATUS_UPDATE_ERROR": "Erreur lors de la mise à jour du statut",
    "ADMIN_UPDATE_SUCCESS": "Collaboration mise à jour",
    "ADMIN_UPDATE_ERROR": "Erreur lors de la mise à jour de la collaboration",
    "ADMIN_DELETE_SUCCESS": "Collaboration supprimée",
    "ADMIN_DELETE_ERROR": "Erreur lors de la suppression de la collaboration",
}

ADDRESS_HIDDEN_HINT = "Adresse complète visible après collaboration acceptée"

# ==================== APPOINTMENTS ====================

APPOINTMENT_TYPES = {
    "estimation": "Estimation",
    "vente": "Vente",
    "achat": "Achat",
    "conseil": "Conseil",
}

APPOINTMENT_STATUS_LABELS = {
    "pending": "En attente",
    "confirmed": "Confirmé",
    "rejected": "Refusé",
    "cancelled": "Annulé",
    "completed": "Terminé",
}
