"""Unit tests for K8sBaseManager."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from acme_http_solver.services.kubernetes.base import K8sBaseManager


class TestK8sBaseManager:
    """Tests for K8sBaseManager base class."""

    @pytest.mark.unit
    @pytest.mark.kubernetes
    def test_init(self, mock_k8s_client: MagicMock) -> None:
        """Manager should initialize with client."""
        manager = K8sBaseManager(mock_k8s_client)

        assert manager._client == mock_k8s_client
        assert manager._log is not None

    @pytest.mark.unit
    @pytest.mark.kubernetes
    def test_resolve_namespace_with_explicit_namespace(self, mock_k8s_client: MagicMock) -> None:
        """Should return explicit namespace when provided."""
        manager = K8sBaseManager(mock_k8s_client)

        assert manager._resolve_namespace("test-namespace") == "test-namespace"

    @pytest.mark.unit
    @pytest.mark.kubernetes
    def test_resolve_namespace_with_none(self, mock_k8s_client: MagicMock) -> None:
        """Should return default namespace when None provided."""
        manager = K8sBaseManager(mock_k8s_client)

        assert manager._resolve_namespace(None) == "default"

    @pytest.mark.unit
    @pytest.mark.kubernetes
    def test_handle_api_error(self, mock_k8s_client: MagicMock) -> None:
        """Should translate API exception through client."""
        manager = K8sBaseManager(mock_k8s_client)
        test_exception = Exception("Test error")
        mock_k8s_client.translate_api_exception.return_value = RuntimeError("Translated error")

        with pytest.raises(RuntimeError, match="Translated error"):
            manager._handle_api_error(test_exception, "Ingress", "web", "ns1")

        mock_k8s_client.translate_api_exception.assert_called_once_with(
            test_exception,
            resource_type="Ingress",
            resource_name="web",
            namespace="ns1",
        )

    @pytest.mark.unit
    @pytest.mark.kubernetes
    def test_call_passes_request_timeout(self, mock_k8s_client: MagicMock) -> None:
        """Should forward arguments and add the client's request timeout."""
        manager = K8sBaseManager(mock_k8s_client)
        api_method = MagicMock(return_value="result")

        result = manager._call(api_method, "pos", name="web", namespace="ns1")

        assert result == "result"
        api_method.assert_called_once_with(
            "pos", _request_timeout=10.0, name="web", namespace="ns1"
        )

    @pytest.mark.unit
    @pytest.mark.kubernetes
    def test_call_translates_errors(self, mock_k8s_client: MagicMock) -> None:
        """Should translate failures using the call's name and namespace."""
        manager = K8sBaseManager(mock_k8s_client)
        manager._resource_type = "Ingress"
        error = Exception("API")
        api_method = MagicMock(side_effect=error)
        mock_k8s_client.translate_api_exception.return_value = RuntimeError("Translated error")

        with pytest.raises(RuntimeError, match="Translated error"):
            manager._call(api_method, name="web", namespace="ns1")

        mock_k8s_client.translate_api_exception.assert_called_once_with(
            error,
            resource_type="Ingress",
            resource_name="web",
            namespace="ns1",
        )

    @pytest.mark.unit
    @pytest.mark.kubernetes
    def test_call_explicit_resource_name(self, mock_k8s_client: MagicMock) -> None:
        """An explicit resource name is used in error context but not forwarded."""
        manager = K8sBaseManager(mock_k8s_client)
        api_method = MagicMock(side_effect=Exception("API"))
        mock_k8s_client.translate_api_exception.return_value = RuntimeError("Translated error")

        with pytest.raises(RuntimeError):
            manager._call(api_method, namespace="ns1", resource_name="solver-")

        assert "resource_name" not in api_method.call_args.kwargs
        kwargs = mock_k8s_client.translate_api_exception.call_args.kwargs
        assert kwargs["resource_name"] == "solver-"
