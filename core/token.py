# core/token.py
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer
from rest_framework_simplejwt.views import TokenObtainPairView


class DantelaTokenObtainPairSerializer(TokenObtainPairSerializer):
    @classmethod
    def get_token(cls, user):
        token = super().get_token(user)
        # claims custom
        token['role'] = getattr(user, "role", None)
        token['username'] = user.username
        if getattr(user, "nom_chantier", ""):
            token['nom_chantier'] = user.nom_chantier
        return token


class DantelaTokenObtainPairView(TokenObtainPairView):
    serializer_class = DantelaTokenObtainPairSerializer
