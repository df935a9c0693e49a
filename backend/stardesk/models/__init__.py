# Importe les modèles pour enregistrer leurs tables dans Base.metadata
# avant que SqlStore appelle create_all().

from stardesk.models.collection import CollectionRecord  # noqa: F401
