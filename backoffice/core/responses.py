"""
Helpers turning upstream result dicts and serializer errors into DRF responses
"""
from rest_framework import status
from rest_framework.response import Response


def result_response(result, success_status=status.HTTP_200_OK, **extra):
    """Render a result dict; failures keep the upstream status code"""
    if result['success']:
        payload = {'success': True, 'data': result.get('data')}
        if result.get('message'):
            payload['message'] = result['message']
        payload.update(extra)
        return Response(payload, status=success_status)
    return error_response(result['error'], result.get('status') or status.HTTP_400_BAD_REQUEST)


def error_response(error, status_code=status.HTTP_400_BAD_REQUEST, **extra):
    payload = {'success': False, 'error': error}
    payload.update(extra)
    return Response(payload, status=status_code)


def first_error_message(errors):
    """First human readable message of a (possibly nested) serializer error structure"""
    if isinstance(errors, dict):
        for value in errors.values():
            message = first_error_message(value)
            if message:
                return message
        return None
    if isinstance(errors, (list, tuple)):
        for value in errors:
            message = first_error_message(value)
            if message:
                return message
        return None
    return str(errors) if errors else None


def validation_error_response(errors):
    """400 response for serializer or hand-built validation errors"""
    return Response({
        'success': False,
        'error': first_error_message(errors) or 'Invalid data',
        'errors': errors,
    }, status=status.HTTP_400_BAD_REQUEST)


def describe_delete_failure(result, subject):
    """
    Replace the upstream error of a failed measurement delete with a
    message the screen can show as is.

    ``subject`` names the record, e.g. ``the individual measurement for "Jane"``.
    """
    if result['success']:
        return result
    code = result.get('status') or 0
    error = str(result.get('error') or '')
    if code in (400, 409):
        message = f'Cannot delete {subject} because there are existing orders for it. ' \
                  'Please cancel or delete these records first before deleting the measurement.'
    elif code == 404:
        message = f'{subject[0].upper()}{subject[1:]} was not found. It may have already been deleted.'
    elif code == 403:
        message = f"You don't have permission to delete {subject}."
    elif code >= 500:
        message = 'A server error occurred while trying to delete the measurement. Please try again later.'
    elif any(word in error.lower() for word in ('foreign key', 'constraint', 'referenced')):
        message = f'Cannot delete {subject} because there are existing orders or appointments ' \
                  'associated with this measurement. Please delete the related orders first, then try again.'
    else:
        message = error or f'Failed to delete {subject}.'
    return {'success': False, 'error': message, 'status': code or 400}
