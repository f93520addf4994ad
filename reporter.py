"""
Console rendering of analysis diagnostics.

The pipeline returns AnalysisResult objects; this module is the only place
that turns them into coloured terminal output.
"""
from colorama import init, Fore, Back, Style

from analysis.models import AnalysisResult, Classification, RejectReason

init(autoreset=True)

CHECK_TITLES = {
    "liquidity": "Liquidity Check",
    "volume": "Volume Check",
    "price_movement": "Price Movement Check",
    "social_score": "Social Score Check",
}

REJECT_MESSAGES = {
    RejectReason.MISSING_ADDRESS: "Skipping token - missing token address",
    RejectReason.NO_POOL_DATA: "No pool data available",
    RejectReason.TRUST_CHECK_FAILED: "Trust check could not be completed (treated as unsafe)",
    RejectReason.TRUST_REJECTED: "Failed RugCheck verification or has danger flags",
    RejectReason.BUNDLED_SUPPLY: "Bundled supply - blacklisted",
    RejectReason.SUSPICIOUS_ACTIVITY: "Suspicious activity detected",
    RejectReason.THRESHOLDS_NOT_MET: "Did not meet winner thresholds",
    RejectReason.ANALYSIS_ERROR: "Error while analyzing token",
}


def status_text(passed):
    return f"{Fore.GREEN}PASSED{Style.RESET_ALL}" if passed else f"{Fore.RED}FAILED{Style.RESET_ALL}"


def print_banner():
    print(f"\n{Back.BLUE}{Fore.WHITE} 🤖 DexScreener Bot Started {Style.RESET_ALL}\n")


def print_trust(result: AnalysisResult):
    trust = result.trust
    if not trust or not trust.required:
        return

    address = result.candidate.token_address
    report = trust.report
    if not trust.passed:
        detail = REJECT_MESSAGES.get(trust.reject_reason, "")
        if report and report.error:
            detail += f" ({report.error})"
        print(f"{Back.RED}{Fore.WHITE} ❌ FAILED {Style.RESET_ALL}{Fore.RED} "
              f"{result.candidate.chain_id} token {address}: {detail}")
    elif trust.warnings:
        print(f"{Back.YELLOW}{Fore.BLACK} ⚠️ WARNING {Style.RESET_ALL}{Fore.YELLOW} "
              f"{result.candidate.chain_id} token {address} passed RugCheck with warnings:")
        for warning in trust.warnings:
            print(f"{Fore.YELLOW}  ▸ {warning}")
    else:
        print(f"{Back.GREEN}{Fore.BLACK} ✅ PASSED {Style.RESET_ALL}{Fore.GREEN} "
              f"{result.candidate.chain_id} token {address} passed RugCheck verification")


def print_checks(result: AnalysisResult):
    print(f"{Fore.CYAN}\nDetailed Token Analysis:")
    for check in result.checks:
        title = CHECK_TITLES.get(check.name, check.name)
        if check.name in ("liquidity", "volume"):
            current = f"${check.value:,.2f}"
        elif check.name == "price_movement":
            current = f"{check.value}%"
        else:
            current = f"{check.value}"
        print(f"{Fore.YELLOW}{title}:")
        print(f"- Current: {current}")
        print(f"- Required: {check.requirement}")
        print(f"- Status: {status_text(check.passed)}\n")


def print_analysis(result: AnalysisResult):
    """Full explanation of one decision."""
    candidate = result.candidate
    print(f"{Fore.CYAN}{'=' * 50}")
    print(f"{Fore.MAGENTA}[{(candidate.chain_id or '?').upper()}] {candidate.token_address or '<no address>'}")

    print_trust(result)

    if result.anomaly_flags:
        print(f"{Fore.RED}Suspicious: {', '.join(result.anomaly_flags)}")

    if result.checks:
        print_checks(result)

    if not result.description_valid:
        print(f"{Fore.YELLOW}Note: low quality description (advisory)")

    if result.accepted:
        print(f"{Fore.GREEN}\n✨ All conditions met! Token qualifies as a winner!\n")
    else:
        message = REJECT_MESSAGES.get(result.reject_reason, "Rejected")
        if result.error:
            message += f": {result.error}"
        print(f"{Fore.RED}❌ {message}")


def print_winner(token: Classification):
    border = f"{Fore.YELLOW}│ "
    print(f"\n{Back.GREEN}{Fore.BLACK} 🏆 WINNER FOUND {Style.RESET_ALL}\n")
    print(f"{Fore.YELLOW}┌────────────────────────────────────────")
    print(f"{border}{Fore.BLUE}Name: {Fore.WHITE}{token.name}")
    print(f"{border}{Fore.BLUE}Address: {Fore.WHITE}{token.address}")
    print(f"{border}{Fore.BLUE}Chain: {Fore.WHITE}{token.blockchain}")
    print(f"{border}{Fore.BLUE}Reason: {Fore.WHITE}{token.reason.value}")
    print(f"{Fore.YELLOW}│")
    print(f"{border}{Fore.BLUE}Metrics:")
    print(f"{border}{Style.DIM}├─{Style.NORMAL}{Fore.BLUE} Price Change: {Fore.WHITE}{token.price_change_percent}%")
    print(f"{border}{Style.DIM}├─{Style.NORMAL}{Fore.BLUE} Volume: {Fore.WHITE}${token.volume_change:,.2f}")
    print(f"{border}{Style.DIM}├─{Style.NORMAL}{Fore.BLUE} Liquidity: {Fore.WHITE}${token.liquidity_change:,.2f}")
    print(f"{border}{Style.DIM}└─{Style.NORMAL}{Fore.BLUE} Social Score: {Fore.WHITE}{token.social_score}")
    print(f"{Fore.YELLOW}└────────────────────────────────────────\n")


def print_summary(stats: dict, winners: int):
    print(f"{Fore.CYAN}{'=' * 50}")
    print(f"Evaluated: {stats.get('total_evaluated', 0)}  Accepted: {stats.get('accepted', 0)}")
    rejected = {k: v for k, v in stats.get('rejected', {}).items() if v}
    if rejected:
        print("Rejected: " + ", ".join(f"{k}={v}" for k, v in rejected.items()))
    if winners == 0:
        print(f"{Fore.RED}❌ No winners found in this run")
