#!/usr/bin/env python3
"""
Basic usage examples for the BSD Tools API client.

Reads the API location and credentials from BSDTOOLS_API_URL,
BSDTOOLS_API_ID and BSDTOOLS_API_SECRET.
"""

import logging
import os
import sys

from bsdtools_client import (
    BSDToolsClient,
    BSDToolsClientError,
    DeferredResolutionTimeout,
    RequestSigner,
    Credentials
)


def main():
    """Run basic usage examples."""

    server_url = os.environ.get("BSDTOOLS_API_URL", "")
    api_id = os.environ.get("BSDTOOLS_API_ID", "")
    secret = os.environ.get("BSDTOOLS_API_SECRET", "")

    print("=== BSD Tools Client Basic Usage Examples ===\n")

    # Example 1: signing without sending anything
    print("1. Signing a request URL...")
    signer = RequestSigner(Credentials("example-id", "example-secret"))
    print(f"   {signer.sign_url('https://example.bsd.net/page/api/list_forms?page=1')}\n")

    print("2. Creating client...")
    try:
        client = BSDToolsClient(api_id, secret, server_url)
    except BSDToolsClientError as e:
        print(f"   Client not created: {e}")
        sys.exit(1)
    print(f"   Client created for: {client.base_url}\n")

    with client:
        # Example 3: deferred results
        client.set_deferred_result_max_attempts(10)
        client.set_deferred_result_interval(2)
        print(f"3. Deferred results: {client.deferred_result_max_attempts} attempts, "
              f"{client.deferred_result_interval}s apart\n")

        # Example 4: GET
        print("4. Signed GET request...")
        try:
            response = client.get("list_forms")
            print(f"   Status: {response.status_code}")
            print(f"   Body: {response.text[:200]}")
        except DeferredResolutionTimeout as e:
            print(f"   Result not ready after {e.max_attempts} attempts")
        except BSDToolsClientError as e:
            print(f"   ✗ GET request error: {e}")
        print()

        # Example 5: POST with a raw body
        print("5. Signed POST request...")
        try:
            response = client.post("set_constituent_data", data="<api><cons/></api>")
            print(f"   Status: {response.status_code}")
        except BSDToolsClientError as e:
            print(f"   ✗ POST request error: {e}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)
    main()
