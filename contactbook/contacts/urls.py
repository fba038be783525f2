from django.urls import path
from . import views

api_urlpatterns = [
    path('', views.api_root, name='api_root'),
    path('contacts/', views.contact_collection, name='contact_collection'),
    path('contacts/<uuid:contact_id>/', views.delete_contact, name='delete_contact'),
]

urlpatterns = [
    path('', views.contact_page, name='contact_page'),
    path('contacts/<uuid:contact_id>/delete/', views.contact_page_delete, name='contact_page_delete'),
]
