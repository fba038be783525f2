import logging

from django.contrib import messages
from django.http import HttpResponse
from django.shortcuts import redirect, render
from django.urls import reverse
from django.utils.http import urlencode
from django.views.decorators.http import require_http_methods, require_POST
from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from .listing import SORT_KEYS, SORT_ORDERS, derive_view, normalize_sort_key
from .serializers import ContactCreateSerializer, ContactSerializer
from .state import ContactFormState, ListViewState
from .store import ContactNotFound, ContactStoreError, contact_store
from .validation import MESSAGE_MAX_LENGTH

logger = logging.getLogger(__name__)


def api_root(request):
    return HttpResponse("Contact API Running", content_type='text/plain')


@api_view(['GET', 'POST'])
def contact_collection(request):
    """
    GET  /api/contacts/   list contacts, newest first (optional q, sort, order)
    POST /api/contacts/   create a contact
    """
    if request.method == 'POST':
        return _create_contact(request)
    return _list_contacts(request)


def _create_contact(request):
    serializer = ContactCreateSerializer(data=request.data)

    if not serializer.is_valid():
        data = request.data if hasattr(request.data, 'get') else {}
        missing = [
            field for field in ('name', 'email', 'phone')
            if not str(data.get(field) or '').strip()
        ]
        return Response(
            {
                "success": False,
                "message": "All required fields missing" if missing else "Invalid contact data",
                "errors": serializer.errors,
            },
            status=status.HTTP_400_BAD_REQUEST,
        )

    try:
        contact = contact_store.create(serializer.validated_data)
    except ContactStoreError as e:
        logger.error(f"Error processing contact: {e}")
        return Response(
            {"success": False, "message": "Internal server error"},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return Response(
        {"success": True, "contact": ContactSerializer(contact).data},
        status=status.HTTP_201_CREATED,
    )


def _list_contacts(request):
    query = request.query_params.get('q', '')
    sort_key = request.query_params.get('sort')
    sort_order = request.query_params.get('order', 'desc')

    if sort_key is not None:
        try:
            sort_key = normalize_sort_key(sort_key)
        except ValueError:
            return Response(
                {"success": False, "message": f"sort must be one of {', '.join(SORT_KEYS)}"},
                status=status.HTTP_400_BAD_REQUEST,
            )
    if sort_order not in SORT_ORDERS:
        return Response(
            {"success": False, "message": f"order must be one of {', '.join(SORT_ORDERS)}"},
            status=status.HTTP_400_BAD_REQUEST,
        )

    try:
        contacts = contact_store.list()
    except ContactStoreError:
        return Response(
            {"success": False, "message": "Error retrieving contacts"},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if query.strip() or sort_key:
        contacts = derive_view(contacts, query, sort_key or 'created_at', sort_order)

    return Response(ContactSerializer(contacts, many=True).data, status=status.HTTP_200_OK)


@api_view(['DELETE'])
def delete_contact(request, contact_id):
    """
    DELETE /api/contacts/<id>/

    Deleting an id that is already gone still answers 200.
    """
    try:
        contact_store.delete_by_id(contact_id)
    except ContactNotFound:
        logger.info(f"Contact {contact_id} already absent, nothing to delete")
    except ContactStoreError:
        return Response(
            {"success": False, "message": "Error deleting contact"},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return Response({"success": True, "message": "Contact deleted"}, status=status.HTTP_200_OK)


# Server-rendered page

def _list_state(request):
    sort_order = request.GET.get('order', 'desc')
    try:
        sort_key = normalize_sort_key(request.GET.get('sort', 'created_at'))
    except ValueError:
        sort_key = 'created_at'
    if sort_order not in SORT_ORDERS:
        sort_order = 'desc'
    return ListViewState(request.GET.get('q', ''), sort_key, sort_order)


def _sort_links(list_state):
    links = {}
    for sort_key in SORT_KEYS:
        toggled = ListViewState(list_state.query, list_state.sort_key, list_state.sort_order)
        toggled.toggle_sort(sort_key)
        active = list_state.sort_key == sort_key
        arrow = ''
        if active:
            arrow = '\u2191' if list_state.sort_order == 'asc' else '\u2193'
        links[sort_key] = {
            'href': '?' + urlencode(toggled.as_params()),
            'active': active,
            'arrow': arrow,
        }
    return links


@require_http_methods(['GET', 'POST'])
def contact_page(request):
    """Form on one side, searchable and sortable contact list on the other."""
    list_state = _list_state(request)
    form_state = ContactFormState()

    if request.method == 'POST':
        form_state = ContactFormState(request.POST)
        if form_state.submit():
            try:
                contact = contact_store.create(form_state.payload())
            except ContactStoreError:
                messages.error(request, "Failed to add contact. Please try again.")
            else:
                messages.success(request, f"{contact.name} has been added to your contacts.")
                return redirect(reverse('contact_page'))

    try:
        contacts = contact_store.list()
    except ContactStoreError:
        contacts = []
        messages.error(request, "Failed to load contacts. Please try again.")

    context = {
        'form': form_state,
        'field_errors': {
            field: form_state.visible_error(field) for field in ContactFormState.FIELDS
        },
        'list_state': list_state,
        'sort_links': _sort_links(list_state),
        'contacts': list_state.view(contacts),
        'total': len(contacts),
        'message_max_length': MESSAGE_MAX_LENGTH,
    }
    return render(request, 'contacts/index.html', context)


@require_POST
def contact_page_delete(request, contact_id):
    try:
        contact = contact_store.get(contact_id)
        contact_store.delete_by_id(contact_id)
    except ContactNotFound:
        messages.info(request, "Contact removed.")
    except ContactStoreError:
        messages.error(request, "Failed to delete contact. Please try again.")
    else:
        messages.success(request, f"{contact.name} has been removed.")
    return redirect(reverse('contact_page'))
