"""
Helpers for the ``{"success": true, "data": ...}`` response envelope.
"""
from rest_framework import status
from rest_framework.response import Response


def success_response(data=None, message=None, http_status=status.HTTP_200_OK):
    body = {'success': True}
    if data is not None:
        body['data'] = data
    if message:
        body['message'] = message
    return Response(body, status=http_status)
