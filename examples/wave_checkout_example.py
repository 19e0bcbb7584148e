"""
Example Wave checkout flows.

This module walks through a hosted checkout session with the Wave connector,
first for a plain merchant account and then for a platform account that
attributes payments to aggregated merchants. Everything runs against the
in-memory WaveSimulator, so no API key or network access is required.
"""
import json
import logging

from wave_adapter import (
    AuthType,
    ConnectorAuthType,
    FallbackStrategy,
    PaymentsAuthorizeRequest,
    PaymentsSyncRequest,
    RefundsRequest,
    SimulatorConfig,
    WaveConnector,
    WaveSimulator,
)

API_KEY = "wave_sn_prod_example_key"


# =============================================================================
# Plain checkout
# =============================================================================
def run_checkout(simulator: WaveSimulator, connector: WaveConnector):
    """
    Create a checkout session, let the payer complete it, then refund part of it.

    Required fields:
    - return_url: Wave sends the payer back here on success and on error
    """
    auth = ConnectorAuthType(auth_type=AuthType.HEADER_KEY, api_key=API_KEY)

    response = connector.authorize(PaymentsAuthorizeRequest(
        amount=5000,  # 5000 XOF
        currency="XOF",
        reference_id="order-1001",
        connector_auth=auth,
        return_url="https://shop.example.com/orders/1001",
        email="customer@example.com",
    ))
    print(f"Checkout session: {response.model_dump_json(indent=2)}")
    # Customer should be redirected to response.redirection_data.endpoint

    simulator.complete_session(response.resource_id)
    synced = connector.sync(PaymentsSyncRequest(
        connector_transaction_id=response.resource_id,
        connector_auth=auth,
        reference_id="order-1001",
    ))
    print(f"After payment: {synced.status.value}")

    refund = connector.refund(RefundsRequest(
        connector_transaction_id=synced.connector_metadata["transaction_id"],
        connector_auth=auth,
        refund_id="refund-1001-1",
        refund_amount=1500,
        currency="XOF",
        reason="item out of stock",
    ))
    print(f"Refund: {refund.model_dump_json(indent=2)}")
    return refund


# =============================================================================
# Aggregated merchants
# =============================================================================
def run_aggregated_checkout(connector: WaveConnector):
    """
    Platform accounts store an enhanced config next to the API key. With
    auto-creation enabled in the connector metadata, the first payment for a
    profile creates its aggregated merchant and attaches it to the session.
    """
    auth = ConnectorAuthType(
        auth_type=AuthType.BODY_KEY,
        api_key=API_KEY,
        key1=json.dumps({
            "aggregated_merchants_enabled": True,
            "default_business_type": "other",
            "cache_ttl_seconds": 1800,
        }),
    )

    response = connector.authorize(PaymentsAuthorizeRequest(
        amount=12000,
        currency="XOF",
        reference_id="order-2001",
        connector_auth=auth,
        return_url="https://market.example.com/orders/2001",
        profile_name="thies-crafts",
        connector_metadata={
            "auto_create_aggregated_merchant": True,
            "aggregated_merchant_name": "Thies Crafts",
            "business_description": "Handmade textiles sold through the marketplace",
        },
    ))
    print(f"Aggregated checkout session: {response.model_dump_json(indent=2)}")
    return response


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)

    simulator = WaveSimulator(SimulatorConfig(api_key=API_KEY, seed=1))
    connector = WaveConnector(
        transport=simulator.transport(),
        fallback_strategies=[FallbackStrategy.CREATE_TEMPORARY],
    )

    run_checkout(simulator, connector)
    run_aggregated_checkout(connector)
    print(f"Aggregated merchants: {list(simulator.merchants)}")
