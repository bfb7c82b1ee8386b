# -*- coding: utf-8 -*-
"""
Module: resolver_default.py
Author: Takeshi
Date: 2026-01-12

Description:
    加密DNS解析器配置类（DNS-over-TLS / DNS-over-HTTPS）以及按需规则
"""


import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List, Dict, Any, Union


# 新增按需规则时使用的默认名称
DEFAULT_RULE_NAME: str = "New Rule"


def _new_id() -> str:
    return str(uuid.uuid4())


def _require_dict(data: Any, what: str) -> Dict[str, Any]:
    """配置文件中的对象必须是字典"""
    if not isinstance(data, dict):
        raise TypeError(f"{what} 必须是字典，得到 {type(data).__name__}")
    return data


class ConfigurationKind(Enum):
    """解析器配置类型"""
    DNS_OVER_TLS = 'dnsOverTLS'
    DNS_OVER_HTTPS = 'dnsOverHTTPS'

    @property
    def display_name(self) -> str:
        return {
            ConfigurationKind.DNS_OVER_TLS: 'DNS-over-TLS',
            ConfigurationKind.DNS_OVER_HTTPS: 'DNS-over-HTTPS',
        }[self]


class OnDemandRuleAction(Enum):
    """按需规则动作"""
    CONNECT = 'connect'
    DISCONNECT = 'disconnect'
    EVALUATE_CONNECTION = 'evaluateConnection'
    IGNORE = 'ignore'


class InterfaceType(Enum):
    """按需规则匹配的网络接口类型"""
    ANY = 'any'
    ETHERNET = 'ethernet'
    WIFI = 'wiFi'
    CELLULAR = 'cellular'


@dataclass
class DoTConfiguration:
    """
    DNS-over-TLS 配置

    Attributes:
        servers (List[str]): DNS服务器IP地址列表，顺序有意义
        server_name (Optional[str]): DoT服务器的TLS名称
    """

    servers: List[str] = field(default_factory=list)
    server_name: Optional[str] = None

    @property
    def kind(self) -> ConfigurationKind:
        return ConfigurationKind.DNS_OVER_TLS

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': self.kind.value,
            'servers': self.servers.copy(),
            'server_name': self.server_name,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DoTConfiguration':
        return cls(
            servers=list(data.get('servers', [])),
            server_name=data.get('server_name'),
        )


@dataclass
class DoHConfiguration:
    """
    DNS-over-HTTPS 配置

    Attributes:
        servers (List[str]): DNS服务器IP地址列表，顺序有意义
        server_url (Optional[str]): DoH服务器URL（规范化后的文本）
    """

    servers: List[str] = field(default_factory=list)
    server_url: Optional[str] = None

    @property
    def kind(self) -> ConfigurationKind:
        return ConfigurationKind.DNS_OVER_HTTPS

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': self.kind.value,
            'servers': self.servers.copy(),
            'server_url': self.server_url,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DoHConfiguration':
        return cls(
            servers=list(data.get('servers', [])),
            server_url=data.get('server_url'),
        )


# 两种配置只能二选一
Configuration = Union[DoTConfiguration, DoHConfiguration]

_CONFIGURATION_CLASSES = {
    ConfigurationKind.DNS_OVER_TLS: DoTConfiguration,
    ConfigurationKind.DNS_OVER_HTTPS: DoHConfiguration,
}


def configuration_kind(configuration: Configuration) -> ConfigurationKind:
    """返回配置的类型，遇到未知类型直接报错"""
    if isinstance(configuration, DoTConfiguration):
        return ConfigurationKind.DNS_OVER_TLS
    elif isinstance(configuration, DoHConfiguration):
        return ConfigurationKind.DNS_OVER_HTTPS
    raise TypeError(f"未知的解析器配置类型: {type(configuration).__name__}")


def default_configuration(kind: ConfigurationKind) -> Configuration:
    """获取指定类型的空配置"""
    return _CONFIGURATION_CLASSES[kind]()


def configuration_from_dict(data: Dict[str, Any]) -> Configuration:
    """根据 type 字段还原配置，缺省为 DNS-over-TLS"""
    _require_dict(data, "解析器配置")
    kind = ConfigurationKind(data.get('type', ConfigurationKind.DNS_OVER_TLS.value))
    return _CONFIGURATION_CLASSES[kind].from_dict(data)


@dataclass
class OnDemandRule:
    """
    按需规则

    决定解析器何时自动启用。每条规则都有独立的 id，
    同名、同内容的两条规则依然可以区分。

    Attributes:
        name (str): 规则名称
        action (OnDemandRuleAction): 匹配后执行的动作，默认 connect
        interface_type (InterfaceType): 匹配的网络接口类型，默认 any
        ssid_match (List[str]): 匹配的Wi-Fi SSID列表
        dns_search_domain_match (List[str]): 匹配的DNS搜索域列表
        dns_server_address_match (List[str]): 匹配的DNS服务器地址列表
        probe_url (Optional[str]): 探测URL
        id (str): 规则唯一标识
    """

    name: str
    action: OnDemandRuleAction = OnDemandRuleAction.CONNECT
    interface_type: InterfaceType = InterfaceType.ANY
    ssid_match: List[str] = field(default_factory=list)
    dns_search_domain_match: List[str] = field(default_factory=list)
    dns_server_address_match: List[str] = field(default_factory=list)
    probe_url: Optional[str] = None
    id: str = field(default_factory=_new_id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'action': self.action.value,
            'interface_type': self.interface_type.value,
            'ssid_match': self.ssid_match.copy(),
            'dns_search_domain_match': self.dns_search_domain_match.copy(),
            'dns_server_address_match': self.dns_server_address_match.copy(),
            'probe_url': self.probe_url,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'OnDemandRule':
        _require_dict(data, "按需规则")
        return cls(
            id=data.get('id') or _new_id(),
            name=data.get('name', DEFAULT_RULE_NAME),
            action=OnDemandRuleAction(data.get('action', OnDemandRuleAction.CONNECT.value)),
            interface_type=InterfaceType(data.get('interface_type', InterfaceType.ANY.value)),
            ssid_match=list(data.get('ssid_match', [])),
            dns_search_domain_match=list(data.get('dns_search_domain_match', [])),
            dns_server_address_match=list(data.get('dns_server_address_match', [])),
            probe_url=data.get('probe_url'),
        )


@dataclass
class Resolver:
    """
    加密DNS解析器

    Attributes:
        name (str): 解析器名称
        configuration (Configuration): DoT 或 DoH 配置，二选一
        on_demand_rules (List[OnDemandRule]): 按需规则，顺序有意义
        id (str): 解析器唯一标识
    """

    name: str
    configuration: Configuration = field(default_factory=DoTConfiguration)
    on_demand_rules: List[OnDemandRule] = field(default_factory=list)
    id: str = field(default_factory=_new_id)

    @property
    def kind(self) -> ConfigurationKind:
        return configuration_kind(self.configuration)

    def rule_indexes(self) -> Dict[str, int]:
        """规则 id 到下标的映射"""
        return {rule.id: i for i, rule in enumerate(self.on_demand_rules)}

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'configuration': self.configuration.to_dict(),
            'on_demand_rules': [rule.to_dict() for rule in self.on_demand_rules],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Resolver':
        _require_dict(data, "解析器")
        return cls(
            id=data.get('id') or _new_id(),
            name=data.get('name', ''),
            configuration=configuration_from_dict(data.get('configuration', {})),
            on_demand_rules=[OnDemandRule.from_dict(item)
                             for item in data.get('on_demand_rules', [])],
        )


@dataclass
class ResolversConfig:
    """
    解析器列表配置

    Attributes:
        resolvers (List[Resolver]): 所有解析器，顺序即界面显示顺序
        used_id (Optional[str]): 当前启用的解析器 id，None 表示未启用任何解析器
    """

    resolvers: List[Resolver] = field(default_factory=list)
    used_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'resolvers': [resolver.to_dict() for resolver in self.resolvers],
            'used_id': self.used_id,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ResolversConfig':
        _require_dict(data, "RESOLVERS_CONFIG")
        resolvers = [Resolver.from_dict(item) for item in data.get('resolvers', [])]
        used_id = data.get('used_id')
        # 指向不存在的解析器时视为未启用
        if used_id not in {resolver.id for resolver in resolvers}:
            used_id = None
        return cls(resolvers=resolvers, used_id=used_id)

    @classmethod
    def get_default_config(cls) -> 'ResolversConfig':
        return cls()


# 内置预设，新建解析器时作为模板
PRESETS: Dict[str, Dict[str, Any]] = {
    'Google Public DNS': {
        'servers': ['8.8.8.8', '8.8.4.4', '2001:4860:4860::8888', '2001:4860:4860::8844'],
        'server_name': 'dns.google',
        'server_url': 'https://dns.google/dns-query',
    },
    'Cloudflare': {
        'servers': ['1.1.1.1', '1.0.0.1', '2606:4700:4700::1111', '2606:4700:4700::1001'],
        'server_name': 'cloudflare-dns.com',
        'server_url': 'https://cloudflare-dns.com/dns-query',
    },
    'Quad9': {
        'servers': ['9.9.9.9', '149.112.112.112', '2620:fe::fe', '2620:fe::9'],
        'server_name': 'dns.quad9.net',
        'server_url': 'https://dns.quad9.net/dns-query',
    },
}


def preset_resolver(preset_name: str, kind: ConfigurationKind) -> Resolver:
    """根据预设创建新的解析器

    Raises:
        KeyError: 预设不存在
    """
    preset = PRESETS[preset_name]
    if kind is ConfigurationKind.DNS_OVER_TLS:
        configuration = DoTConfiguration(servers=list(preset['servers']),
                                         server_name=preset['server_name'])
    else:
        configuration = DoHConfiguration(servers=list(preset['servers']),
                                         server_url=preset['server_url'])
    return Resolver(name=f"{preset_name} ({kind.display_name})", configuration=configuration)
