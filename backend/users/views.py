from rest_framework import generics
from rest_framework.permissions import AllowAny, IsAuthenticated
from .serializers import UserRegistrationSerializer, UserDetailsSerializer

class RegisterAPIView(generics.CreateAPIView):
    serializer_class=UserRegistrationSerializer
    permission_classes=[AllowAny]
    authentication_classes=[]

register_api_view=RegisterAPIView.as_view()


class UserDetailView(generics.RetrieveUpdateAPIView):
    """
    GET/PATCH the authenticated user's profile.
    """
    serializer_class=UserDetailsSerializer
    permission_classes=[IsAuthenticated]

    def get_object(self):
        return self.request.user

user_detail_view=UserDetailView.as_view()
