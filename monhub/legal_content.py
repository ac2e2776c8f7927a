"""Static legal pages, as ordered sections."""

LAST_UPDATED = "30 décembre 2025"
CONTACT_EMAIL = "contact@monhubimmo.fr"
COMPANY_ADDRESS = "44 Le Domaine du Golf, 35540 Le Tronchet, France"

LEGAL_PAGES = {
    "mentions-legales": {
        "title": "Mentions légales",
        "description": "Mentions légales de MonHubimmo",
        "intro": None,
        "sections": [
            {
                "title": "Éditeur du site",
                "paragraphs": [
                    "Monhubimmo est une Société par actions simplifiée (SAS) au capital "
                    "social de 2 000 euros, immatriculée au Registre du Commerce et des "
                    "Sociétés de Saint-Malo sous le numéro 995 292 547, dont le siège "
                    "social est situé 44 Le Domaine du Golf, 35540 Le Tronchet.",
                    "La société est représentée par son Président, Monsieur Cyril Fortin "
                    "Miserel, et dirigée par son Directeur général, Monsieur Nicolas "
                    "Fortin Miserel.",
                    "Monhubimmo a pour activité principale la conception, la programmation "
                    "de logiciels, sites web et outils informatiques, ainsi que la création "
                    "et l'hébergement de sites internet, et exerce son activité en "
                    "exploitation directe.",
                ],
                "facts": [
                    ("Dénomination sociale", "Monhubimmo"),
                    ("Forme juridique", "SAS"),
                    ("Capital social", "2 000 euros"),
                    ("Siège social", COMPANY_ADDRESS),
                    ("RCS", "Saint-Malo 995 292 547"),
                    ("SIRET", "995 292 547 00016"),
                    ("Numéro de TVA intracommunautaire", "FR82995292547"),
                    ("Président", "Monsieur Cyril Fortin Miserel"),
                    ("Directeur général", "Monsieur Nicolas Fortin Miserel"),
                    ("Directeur de la publication", "Monsieur Cyril Fortin Miserel"),
                    ("Nom de domaine", "www.monhubimmo.fr"),
                    ("Contact", CONTACT_EMAIL),
                ],
            },
            {
                "title": "Hébergement",
                "paragraphs": [],
                "facts": [
                    ("Hébergement du site web (frontend)", "Vercel Inc., 340 S Lemon Ave #4133, Walnut, CA 91789, États-Unis"),
                    ("Hébergement des services (backend)", "Railway Corporation"),
                    ("Stockage des fichiers", "Amazon Web Services, Paris (eu-west-3), Union Européenne"),
                    ("Base de données", "MongoDB Atlas, Union Européenne"),
                ],
            },
            {
                "title": "Propriété intellectuelle",
                "paragraphs": [
                    "L'ensemble des contenus du site (textes, images, logo, charte "
                    "graphique) est protégé par le droit de la propriété intellectuelle.",
                    "Toute reproduction, diffusion ou utilisation sans autorisation est "
                    "interdite.",
                ],
            },
            {
                "title": "Protection des données",
                "paragraphs": [
                    "Pour plus d'informations sur la collecte et le traitement de vos "
                    "données, consultez notre Politique de confidentialité.",
                ],
                "links": [("Politique de confidentialité", "/politique-de-confidentialite")],
            },
            {
                "title": "Contact",
                "paragraphs": [
                    "Pour toute question concernant les présentes mentions légales, vous "
                    f"pouvez nous contacter : {CONTACT_EMAIL}.",
                    f"Par courrier : Monhubimmo, {COMPANY_ADDRESS}.",
                ],
            },
        ],
        "footer": "Ces mentions légales peuvent être modifiées à tout moment. Il "
        "appartient à l'utilisateur de s'y référer régulièrement.",
    },
    "politique-de-confidentialite": {
        "title": "Politique de confidentialité",
        "description": "Politique de confidentialité de MonHubimmo",
        "intro": "Chez MonHubimmo, la protection de vos données personnelles est une "
        "priorité. Nous nous engageons à assurer la transparence et la sécurité dans "
        "le traitement des informations que vous nous confiez.",
        "sections": [
            {
                "title": "Données collectées",
                "paragraphs": [
                    "Lors de votre inscription, nous pouvons être amenés à collecter :",
                    "Ces informations sont nécessaires pour vérifier votre statut de "
                    "professionnel et vous donner accès à la plateforme.",
                ],
                "items": [
                    "Votre nom, prénom",
                    "Votre adresse e-mail",
                    "Votre numéro de téléphone",
                    "Vos informations professionnelles",
                ],
            },
            {
                "title": "Utilisation des données",
                "paragraphs": [
                    "Vos données sont utilisées uniquement pour :",
                    "Nous ne vendons ni ne partageons vos données personnelles à des "
                    "tiers non autorisés.",
                ],
                "items": [
                    "Créer et gérer votre compte MonHubimmo",
                    "Vous informer sur le lancement et l'évolution de la plateforme",
                    "Assurer la sécurité des échanges et des publications",
                    "Vous adresser, si vous l'acceptez, des communications liées à nos services",
                ],
            },
            {
                "title": "Hébergement et sécurité",
                "paragraphs": [
                    "Vos données sont hébergées par des prestataires de confiance offrant "
                    "des garanties de sécurité conformes aux standards de l'industrie :",
                    "Certains de nos prestataires sont situés en dehors de l'Union "
                    "Européenne (États-Unis). Dans ce cas, nous nous assurons que des "
                    "garanties appropriées sont en place (clauses contractuelles types, "
                    "Data Privacy Framework) pour protéger vos données conformément au RGPD.",
                    "Des mesures techniques et organisationnelles sont mises en place pour "
                    "prévenir toute perte, utilisation abusive, accès non autorisé ou "
                    "divulgation (chiffrement SSL/TLS, authentification sécurisée, "
                    "sauvegardes régulières).",
                ],
                "items": [
                    "Amazon Web Services S3 (région Paris, eu-west-3)",
                    "Vercel Inc.",
                    "Railway Corporation",
                    "Brevo (Sendinblue), société française",
                    "Paiements : Stripe Payments Europe, Ltd.",
                ],
            },
            {
                "title": "Droits des utilisateurs",
                "paragraphs": [
                    "Conformément au Règlement Général sur la Protection des Données "
                    "(RGPD), vous disposez de droits :",
                    f"Pour exercer vos droits : {CONTACT_EMAIL}",
                ],
                "items": [
                    "Accéder à vos données personnelles",
                    "Demander leur rectification ou suppression",
                    "Limiter ou vous opposer à leur traitement",
                    "Retirer votre consentement à tout moment",
                ],
            },
            {
                "title": "Conservation des données",
                "paragraphs": [
                    "Vos données sont conservées uniquement pendant la durée nécessaire à "
                    "la gestion de votre compte et conformément aux obligations légales.",
                ],
            },
            {
                "title": "Contact",
                "paragraphs": [
                    "Pour toute question relative à la protection de vos données "
                    f"personnelles, vous pouvez nous écrire à : {CONTACT_EMAIL}",
                ],
            },
        ],
        "footer": "En utilisant MonHubimmo, vous acceptez notre politique de "
        "confidentialité et le traitement de vos données personnelles dans les "
        "conditions décrites ci-dessus.",
    },
    "politique-cookies": {
        "title": "Politique des cookies",
        "description": "Politique des cookies de MonHubimmo",
        "intro": "Le site MonHubimmo utilise des cookies afin d'améliorer l'expérience "
        "utilisateur, analyser la fréquentation et proposer des contenus adaptés.",
        "sections": [
            {
                "title": "Qu'est-ce qu'un cookie ?",
                "paragraphs": [
                    "Un cookie est un petit fichier texte enregistré sur votre appareil "
                    "(ordinateur, tablette, smartphone) lors de la consultation d'un site "
                    "internet. Il ne permet pas de vous identifier directement, mais il "
                    "enregistre des informations relatives à votre navigation.",
                ],
            },
            {
                "title": "Quels types de cookies utilisons-nous ?",
                "paragraphs": [],
                "facts": [
                    ("Cookies strictement nécessaires", "indispensables au fonctionnement du site (ex. sécurisation, accès au compte)."),
                    ("Cookies de performance et statistiques", "permettent de mesurer l'audience et d'améliorer les services proposés."),
                    ("Cookies de personnalisation (si utilisés)", "adaptés à vos préférences de navigation."),
                    ("Cookies tiers", "peuvent être déposés par des partenaires (ex. réseaux sociaux, outils d'analyse)."),
                ],
            },
            {
                "title": "Consentement et durée",
                "paragraphs": [
                    "Lors de votre première visite, une bannière vous informe de "
                    "l'utilisation de cookies. Vous pouvez accepter, refuser ou paramétrer "
                    "vos choix.",
                    "La durée de conservation des cookies est 13 mois maximum, "
                    "conformément à la réglementation.",
                ],
            },
            {
                "title": "Gestion des cookies",
                "paragraphs": [
                    "Vous pouvez à tout moment gérer ou désactiver les cookies en "
                    "paramétrant votre navigateur.",
                ],
                "items": ["Chrome", "Firefox", "Safari", "Edge"],
            },
        ],
        "footer": "En continuant à naviguer sur MonHubimmo, vous acceptez "
        "l'utilisation des cookies selon les modalités décrites ci-dessus.",
    },
    "cookies": {
        "title": "Politique des cookies",
        "description": "Cookies - MonHubimmo",
        "intro": "En poursuivant votre navigation sur MonHubimmo, vous acceptez "
        "l'utilisation de cookies nécessaires au bon fonctionnement du site.",
        "sections": [
            {
                "title": "Vos préférences",
                "paragraphs": [
                    "Vous pouvez toutefois paramétrer vos préférences à tout moment via "
                    "notre bandeau de gestion des cookies.",
                    "Pour en savoir plus sur l'utilisation de vos données et vos droits, "
                    "consultez notre Politique de confidentialité.",
                ],
                "links": [("Politique de confidentialité", "/politique-de-confidentialite")],
            },
        ],
        "footer": "En continuant à naviguer sur MonHubimmo, vous acceptez "
        "l'utilisation des cookies selon les modalités décrites ci-dessus.",
    },
}
