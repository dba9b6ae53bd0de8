# homedecor.config
from pathlib import Path
import os
from dotenv import load_dotenv

# Calculer le chemin du projet puis charger .env de manière explicite
BASE_DIR = Path(__file__).resolve().parent.parent
ENV_PATH = BASE_DIR / ".env"
load_dotenv(dotenv_path=ENV_PATH, override=True)

"""
Configuration centrale du backend.

- Charge le fichier .env à la racine du projet (BASE_DIR/.env)
- Normalise et expose les secrets/URLs (Supabase, Stripe), CORS/hosts
- Fournit les URLs de redirection du checkout (succès/annulation) et les constantes de paiement
"""

def _clean_env(v: str) -> str:
    """
    Nettoie une valeur d'environnement:
    - supprime les espaces et guillemets (simples, doubles) et backticks
    - retourne toujours une chaîne (jamais None)
    """
    return (v or "").strip().strip("'").strip('"').strip("`")

def _split_env(name: str, default: str) -> list:
    return [x.strip() for x in os.getenv(name, default).split(",") if x.strip()]

# Supabase: URL et clé service (les écritures se font côté serveur)
# - SUPABASE_URL peut parfois être sans schéma: on préfixe en https:// si nécessaire
SUPABASE_URL = _clean_env(os.getenv("SUPABASE_URL") or "")
SUPABASE_SERVICE_KEY = _clean_env(os.getenv("SUPABASE_SERVICE_KEY") or os.getenv("SUPABASE_KEY") or "")

if SUPABASE_URL and not SUPABASE_URL.startswith("http"):
    SUPABASE_URL = "https://" + SUPABASE_URL
if SUPABASE_URL.endswith("/"):
    SUPABASE_URL = SUPABASE_URL.rstrip("/")

# CORS (dev)
CORS_ORIGINS = _split_env("CORS_ORIGINS", "*")
ALLOWED_HOSTS = _split_env("ALLOWED_HOSTS", "localhost,127.0.0.1,testserver")

# Stripe: clé secrète (STRIPE_SECRET accepté pour les anciens déploiements)
STRIPE_SECRET_KEY = _clean_env(os.getenv("STRIPE_SECRET_KEY") or os.getenv("STRIPE_SECRET") or "")

# Front: domaine du site (SITE_DOMIN = ancienne orthographe conservée)
SITE_DOMAIN = _clean_env(os.getenv("SITE_DOMAIN") or os.getenv("SITE_DOMIN") or "http://localhost:5173").rstrip("/")

# Pages de succès/annulation du checkout (côté front)
CHECKOUT_SUCCESS_PATH = os.getenv("CHECKOUT_SUCCESS_PATH", "/dashboard/payment-success")
CHECKOUT_CANCEL_PATH = os.getenv("CHECKOUT_CANCEL_PATH", "/dashboard/payment-cancel")
CHECKOUT_CURRENCY = _clean_env(os.getenv("CHECKOUT_CURRENCY") or "usd").lower()

# Code de suivi remis au client après paiement
TRACKING_ID_PREFIX = os.getenv("TRACKING_ID_PREFIX", "TRK-")
