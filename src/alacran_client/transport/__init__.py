"""Request transport for the Alacran API.

Modules:
    http: ``HttpTransport``, which sends requests, unwraps envelopes and
        withholds results after ``destroy()``
    reauth: ``Reauthenticator``, which logs in again when a token is rejected

Example:
    ```python
    from alacran_client.transport import HttpTransport, Reauthenticator

    transport = HttpTransport(
        "https://alacran.example.com/api/v1",
        provider,
        reauthenticator=Reauthenticator(provider),
    )
    info = await transport.fetch("GET", "/user/system/info")
    ```
"""

from alacran_client.transport.http import HttpTransport, is_file_value
from alacran_client.transport.reauth import Reauthenticator

__all__ = ["HttpTransport", "Reauthenticator", "is_file_value"]
