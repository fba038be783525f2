from django.contrib import admin
from django.urls import path, include

from contacts.urls import api_urlpatterns

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/', include(api_urlpatterns)),
    path('', include('contacts.urls')),
]
