from typing import Final

POLYGON_CHAIN_ID: Final[int] = 137

AGGREGATED_TOKEN_LISTS: Final[tuple[str, ...]] = (
    "https://unpkg.com/@sushiswap/default-token-list/build/sushiswap-default.tokenlist.json",
    "https://unpkg.com/quickswap-default-token-list/build/quickswap-default.tokenlist.json",
    "https://unpkg.com/@cometh-game/default-token-list/build/comethswap-default.tokenlist.json",
)

# Order matters: BSC is searched before Ethereum
CHAIN_ASSET_LISTS: Final[tuple[str, ...]] = (
    "https://raw.githubusercontent.com/trustwallet/assets/master/blockchains/smartchain/tokenlist.json",
    "https://raw.githubusercontent.com/trustwallet/assets/master/blockchains/ethereum/tokenlist.json",
)

TOKEN_REWRITES: Final[dict[str, str]] = {
    "beltBTC": "BTC",
    "BTC": "btcb",
    "BNB": "wbnb",
    "pAUTO": "AUTO",
    "QUICK": "Quick",
}

CUSTOM_IMAGES: Final[dict[str, str]] = {
    "r4Belt": "https://s.belt.fi/info/R4BELT@2x.png",
    "LAUNCH": "https://superlauncher.io/img/coin/launch.svg",
    "MRF": "https://superlauncher.io/img/project/mrf/mrf-logo.svg",
    "CIFI": "https://superlauncher.io/img/project/cifi/cifi-logo.svg",
    "BYG": "https://superlauncher.io/img/project/black-eye-galaxy-logo.png",
    "C98": "https://assets.trustwalletapp.com/blockchains/smartchain/assets/0xaEC945e04baF28b135Fa7c640f624f8D90F1C3a6/logo.png",
}
