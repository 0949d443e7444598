#!/usr/bin/env python3
import unittest

from alert_relay.detection import decode_body, detect_payload, decode_for_route, sniff_payload
from alert_relay.errors import BadRequest, UnrecognizedSchema, UnsupportedPayload
from alert_relay.models import AlertmanagerPayload, GrafanaAlertPayload, GrafanaLegacyPayload

ALERTMANAGER = {
    "version": "4",
    "groupKey": "{}:{alertname=\"Disk\"}",
    "status": "firing",
    "receiver": "relay",
    "alerts": [
        {"status": "firing", "labels": {"alertname": "Disk"}, "annotations": {"description": "full"},
         "generatorURL": "http://x"},
    ],
}

GRAFANA_BATCH = {
    "receiver": "relay",
    "status": "firing",
    "orgId": 1,
    "groupKey": "{}/{}:{}",
    "title": "[FIRING:1] HighCPU",
    "state": "alerting",
    "message": "**Firing**",
    "alerts": [
        {"status": "firing", "labels": {"alertname": "HighCPU"}, "generatorURL": "http://grafana/alerting/1"},
    ],
}

GRAFANA_LEGACY = {
    "title": "[Alerting] Load",
    "ruleId": 3,
    "ruleName": "Load",
    "ruleUrl": "http://grafana/d/abc",
    "state": "alerting",
    "message": "load acima do limite",
    "evalMatches": [{"metric": "load1", "value": 7, "tags": {}}],
}


class TestDecodeBody(unittest.TestCase):
    def test_decodes_bytes(self):
        self.assertEqual(decode_body(b'{"a": 1}'), {"a": 1})

    def test_malformed_json_is_bad_request(self):
        for raw in [b'{"alerts": [', b'', b'not json', b'\xff\xff']:
            with self.assertRaises(BadRequest, msg=f"esperado BadRequest para {raw!r}"):
                decode_body(raw)

    def test_deeply_nested_json_is_bad_request(self):
        with self.assertRaises(BadRequest):
            decode_body(b"[" * 100000 + b"]" * 100000)


class TestContentSniffing(unittest.TestCase):
    def test_detects_each_variant(self):
        self.assertIsInstance(sniff_payload(ALERTMANAGER), AlertmanagerPayload)
        self.assertIsInstance(sniff_payload(GRAFANA_BATCH), GrafanaAlertPayload)
        self.assertIsInstance(sniff_payload(GRAFANA_LEGACY), GrafanaLegacyPayload)

    def test_minimal_alertmanager_body(self):
        payload = sniff_payload({"alerts": [{"status": "firing"}]})
        self.assertIsInstance(payload, AlertmanagerPayload)

    def test_legacy_wins_over_batch(self):
        # ruleName tem prioridade mesmo com campos de lote presentes
        mixed = dict(GRAFANA_BATCH, ruleName="Load")
        self.assertIsInstance(sniff_payload(mixed), GrafanaLegacyPayload)

    def test_falls_through_when_higher_priority_does_not_validate(self):
        # orgId inválido: Grafana lote falha e Alertmanager assume
        data = dict(ALERTMANAGER, orgId="nao-e-numero")
        self.assertIsInstance(sniff_payload(data), AlertmanagerPayload)

    def test_unknown_shape_is_unrecognized(self):
        for data in [{"foo": "bar"}, [], "texto", 42, None, {"alerts": "nao-e-lista"}]:
            with self.assertRaises(UnrecognizedSchema) as ctx:
                sniff_payload(data)
            self.assertEqual(ctx.exception.payload, data)
            self.assertIsInstance(ctx.exception, UnsupportedPayload)

    def test_detect_payload_without_schema_sniffs(self):
        self.assertIsInstance(detect_payload(GRAFANA_LEGACY), GrafanaLegacyPayload)


class TestRouteScoped(unittest.TestCase):
    def test_alertmanager_route(self):
        payload = decode_for_route(ALERTMANAGER, "alertmanager")
        self.assertIsInstance(payload, AlertmanagerPayload)
        self.assertEqual(payload.receiver, "relay")

    def test_grafana_route_batch_and_legacy(self):
        self.assertIsInstance(decode_for_route(GRAFANA_BATCH, "grafana"), GrafanaAlertPayload)
        self.assertIsInstance(decode_for_route(GRAFANA_LEGACY, "grafana"), GrafanaLegacyPayload)

    def test_grafana_route_does_not_require_org_id(self):
        data = {"alerts": [{"status": "firing", "labels": {"alertname": "X"}}]}
        self.assertIsInstance(decode_for_route(data, "grafana"), GrafanaAlertPayload)

    def test_route_decode_failure_is_bad_request(self):
        for data in [[], "texto", {"alerts": "nao-e-lista"}, {"alerts": [{"labels": {"a": 1}}]}]:
            with self.assertRaises(BadRequest):
                decode_for_route(data, "alertmanager")
        with self.assertRaises(BadRequest):
            decode_for_route({"ruleName": "x", "ruleId": "abc"}, "grafana")

    def test_unknown_route_schema(self):
        with self.assertRaises(ValueError):
            decode_for_route(ALERTMANAGER, "zabbix")


if __name__ == '__main__':
    unittest.main()
