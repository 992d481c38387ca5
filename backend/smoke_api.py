#!/usr/bin/env python3
"""
Manual smoke script for a running Norsk Pensjon plugin (python run_server.py)
"""

import requests
import json

# API base URL
BASE_URL = "http://localhost:8000"


def check_health():
    """Check the health endpoint"""
    print("Checking health endpoint...")
    response = requests.get(f"{BASE_URL}/health")
    print(f"Status: {response.status_code}")
    print(f"Response: {response.json()}")
    print()


def check_metadata():
    """Fetch the evidence code catalog"""
    print("Checking metadata endpoint...")
    response = requests.get(f"{BASE_URL}/api/evidencecodes")
    print(f"Status: {response.status_code}")
    for code in response.json():
        values = ", ".join(v["evidenceValueName"] for v in code.get("values", []))
        print(f"  {code['evidenceCodeName']}: {values}")
    print()


def check_harvest(ssn: str = "01010199999"):
    """Harvest evidence for one subject"""
    print("Checking harvest endpoint...")

    harvest_request = {
        "subjectParty": {"norwegianSocialSecurityNumber": ssn},
        "evidenceCodeName": "NorskPensjon",
    }
    print(f"Request: {json.dumps(harvest_request, indent=2)}")
    print()

    try:
        response = requests.post(
            f"{BASE_URL}/api/NorskPensjon",
            json=harvest_request,
            headers={"Content-Type": "application/json"}
        )
        print(f"Status: {response.status_code}")

        if response.status_code == 200:
            for value in response.json():
                print(f"  {value['name']} from {value['source']}: {value['value'][:80]}")
        else:
            error = response.json()
            print(f"Failed: {error.get('severity')} {error.get('name')} - {error.get('detail')}")

    except requests.exceptions.ConnectionError:
        print("Could not connect to the API server")
        print("Make sure the server is running: python run_server.py")

    print()


if __name__ == "__main__":
    print("Norsk Pensjon plugin smoke check")
    print("=" * 50)

    try:
        check_health()
        check_metadata()
        check_harvest()
    except KeyboardInterrupt:
        print("\nInterrupted by user")
