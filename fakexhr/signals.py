"""
fakexhr signals

Sent by fake requests that were created through an
:class:`~fakexhr.factory.XHRFactory`, with the request as the ``xhr`` keyword
argument.
"""

request_sent = object()
response_received = object()
request_aborted = object()
